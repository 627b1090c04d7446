# recall_app/db.py
from flask_sqlalchemy import SQLAlchemy

# No schema prefix: the tables live in the default schema so SQLite works for dev/tests.
db = SQLAlchemy()
