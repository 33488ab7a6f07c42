"""
blog_service package

Identity layer of the blog posting service:

- FastAPI application (`main.py`)
- SQLAlchemy models and database integration (`models.py`, `db.py`)
- Password hashing, credential storage and session tokens
  (`passwords.py`, `store.py`, `tokens.py`)
- Per-request session resolution and ownership checks
  (`session.py`, `ownership.py`)
- Pydantic schemas (`schemas.py`)
"""
