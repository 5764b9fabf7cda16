from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS

# Singletons (initialized in app factory)
db = SQLAlchemy()
cors = CORS()
