"""
Application Layer

Services that own the voting session at runtime and coordinate
persistence and notification around it.
"""
