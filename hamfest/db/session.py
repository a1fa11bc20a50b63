from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hamfest.db.models import Base
from hamfest.settings import get_settings

settings = get_settings()

engine = create_engine(settings.database_url, future=True)
Session = sessionmaker(engine)

Base.metadata.create_all(engine)
