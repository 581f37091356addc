"""
Data layer: SQLAlchemy models only.

Business rules (stock deltas, state transitions, validation) live in
`backoffice/buisness/`.
"""
