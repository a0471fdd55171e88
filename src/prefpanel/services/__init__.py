"""Service layer: default seeding, options rendering, enabling, CLI services.

Services may import from domain, infrastructure, plugins and config.
They must never import from commands or output.
"""
