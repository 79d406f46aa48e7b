from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Store operations commit before returning; keep loaded rows readable afterwards.
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()
