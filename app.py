import logging
import os

import click
from config import config
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate


def create_app(config_name=None):
    """Application factory pattern"""
    if config_name is None:
        config_name = os.getenv("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s - %(name)s - %(message)s",
    )

    CORS(
        app,
        resources={
            r"/dictionary/*": {"origins": app.config["ALLOWED_ORIGINS"]},
        },
    )

    # Initialize SQLAlchemy
    from models import db

    db.init_app(app)

    # Initialize Flask-Migrate
    Migrate(app, db)

    # Import all models to ensure they are registered with SQLAlchemy
    from models.definition import Definition, DefinitionExample
    from models.translation import Translation, DefinitionTranslation, ExampleTranslation
    from models.word import Word, WordDetails, WordDefinition
    from models.word_relationship import WordToWordRelationship

    # Register API blueprints
    from routes.dictionary import bp as dictionary_bp

    app.register_blueprint(dictionary_bp)

    @app.cli.command("import-translations")
    @click.argument("word_id", type=int)
    def import_translations(word_id):
        """Import machine translations for a stored word."""
        from services.word_translation_service import import_translations_for_word_id

        try:
            result = import_translations_for_word_id(word_id)
        except LookupError as e:
            raise click.ClickException(str(e))

        if result is None:
            raise click.ClickException("Translation service returned no data")

        summary = result.to_dict()
        click.echo(
            f"Imported translations for '{summary['word']}': "
            f"{summary['definition_translations']} definition translations, "
            f"{summary['example_translations']} example translations, "
            f"{len(summary['variant_word_ids'])} variants"
            + (" (transaction conflict, nothing written)" if summary["conflict"] else "")
        )

    # Home route
    @app.route("/")
    def home():
        return jsonify({"message": "Welcome to Lexiconic!", "version": "1.0.0"})

    # Health check route
    @app.route("/health")
    def health_check():
        try:
            db.session.execute(db.text("SELECT 1"))
            return jsonify({"status": "healthy", "database": "connected"}), 200
        except Exception as e:
            app.logger.error(f"Health check failed: {e}")
            return jsonify({"status": "unhealthy", "error": str(e)}), 500

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, port=5001)
