"""
TableFilter Infrastructure.

Cross-cutting concerns (logging) shared by the core and the adapters.
"""
