import logging
import os

import click
from flask import Flask, redirect, render_template, url_for
from flask_wtf import CSRFProtect
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.routing import IntegerConverter

from data_models import MAX_ID, db


basedir = os.path.abspath(os.path.dirname(__file__))

csrf = CSRFProtect()


class IdConverter(IntegerConverter):
    """Record id in a URL; values the database cannot hold do not match."""

    def __init__(self, map, *args, **kwargs):
        kwargs.setdefault('max', MAX_ID)
        super().__init__(map, *args, **kwargs)


def _default_database_uri():
    db_path = os.path.join(basedir, 'data', 'library.sqlite')
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return 'sqlite:///' + db_path.replace('\\', '/')


def create_app(test_config=None):
    app = Flask(__name__)

    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL') or None
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret')
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO')
    if test_config:
        app.config.from_mapping(test_config)
    if not app.config['SQLALCHEMY_DATABASE_URI']:
        app.config['SQLALCHEMY_DATABASE_URI'] = _default_database_uri()

    app.logger.setLevel(getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO))

    db.init_app(app)
    csrf.init_app(app)

    app.url_map.converters['id'] = IdConverter

    from catalog import bp as catalog_bp
    app.register_blueprint(catalog_bp)

    @app.get('/')
    def home():
        return redirect(url_for('catalog.index'))

    @app.errorhandler(404)
    def not_found(error):
        return render_template('error.html', title='Not Found', status=404,
                               message=error.description), 404

    @app.errorhandler(SQLAlchemyError)
    def store_failure(error):
        db.session.rollback()
        app.logger.exception('Database error while handling request')
        return render_template('error.html', title='Error', status=500,
                               message='The catalog could not complete this request.'), 500

    @app.cli.command('init-db')
    def init_db():
        """Create the catalog tables."""
        db.create_all()
        click.echo('Initialized the catalog database.')

    return app


if __name__ == '__main__':
    create_app().run(debug=True)
