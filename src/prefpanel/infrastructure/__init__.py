"""Infrastructure layer: host capabilities and their local implementations.

Preference services (in-memory and SQLite via SQLAlchemy Core), the
document helpers built on ``xml.dom.minidom``, the add-on manager,
manifest loading and localization.
"""
