"""Registry — the bundled catalog of terminal-UI components.

The registry provides:
- Cataloging: component metadata loaded from registry.yaml
- Discovery: lookup by name, keyword search, category filters
- Templates: the source files copied into a consuming project
"""
