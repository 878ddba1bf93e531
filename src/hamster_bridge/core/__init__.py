"""
Core of the Hamster bridge.

Components:
- document.py: notes, front-matter location, a read-only line editor
- frontmatter.py: YAML front-matter -> metadata mapping
- task_line.py: task-line detection, markup stripping, fact composition
- plugin_settings.py: the persisted plugin setting
- ports.py: Protocols for the Hamster client, notices and editors
"""
