"""
Application services layer (use cases).

Services orchestrate the domain logic to resolve a viewer's calendar:
region heuristics, date resolution, multi-provider aggregation, window
filtering and the resolve_schedule entry point.

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
