import os
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask
from .config import Config
from .extensions import db, migrate, cache
from .blueprints.api import api_bp
from .commands import init_db_command, stats_command

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    migrate.init_app(app, db)
    cache.init_app(app)

    app.register_blueprint(api_bp)

    app.cli.add_command(init_db_command)
    app.cli.add_command(stats_command)

    from . import models  # noqa: F401

    if not app.debug and not app.testing:
        if not os.path.exists('logs'):
            os.mkdir('logs')
        file_handler = RotatingFileHandler('logs/resellerhub.log', maxBytes=102400, backupCount=10)
        file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s'))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)

    return app
