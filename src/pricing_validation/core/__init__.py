"""Core enumerations and helpers shared by validation, store and interfaces."""
