"""Single-proposal voting ledger with sentiment-weighted outcomes."""

__version__ = "0.1.0"
