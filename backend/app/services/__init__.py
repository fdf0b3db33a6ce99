"""Services Layer — application services orchestrating repositories around pure core logic.

Invariants:
    - Services depend on core Protocols, never on concrete infrastructure
    - Merge logic lives in core/; services only sequence the IO around it
"""
