from models import db
from models.enums import LanguageCode, SourceType
from datetime import datetime, timezone


class Translation(db.Model):
    """Translation model - a translated string shared by every definition/example with the same text"""
    __tablename__ = 'translations'

    id = db.Column(db.Integer, primary_key=True)

    language_code = db.Column(db.Enum(LanguageCode, name='language_code'), nullable=False)
    content = db.Column(db.Text, nullable=False)
    source = db.Column(db.Enum(SourceType, name='source_type'), nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))

    # No unique constraint: (content, language_code, source) is deduplicated on lookup
    __table_args__ = (
        db.Index('ix_translation_language_source', 'language_code', 'source'),
    )

    def __repr__(self):
        return f'<Translation {self.id} ({self.language_code.value if self.language_code else None})>'


class DefinitionTranslation(db.Model):
    """Join row linking a Definition to one of its translations"""
    __tablename__ = 'definition_translations'

    definition_id = db.Column(db.Integer, db.ForeignKey('definitions.id'), primary_key=True)
    translation_id = db.Column(db.Integer, db.ForeignKey('translations.id'), primary_key=True)

    # Relationships
    definition = db.relationship('Definition', back_populates='translations')
    translation = db.relationship('Translation')

    def __repr__(self):
        return f'<DefinitionTranslation definition={self.definition_id} translation={self.translation_id}>'


class ExampleTranslation(db.Model):
    """Join row linking a DefinitionExample to one of its translations"""
    __tablename__ = 'example_translations'

    example_id = db.Column(db.Integer, db.ForeignKey('definition_examples.id'), primary_key=True)
    translation_id = db.Column(db.Integer, db.ForeignKey('translations.id'), primary_key=True)

    # Relationships
    example = db.relationship('DefinitionExample', back_populates='translations')
    translation = db.relationship('Translation')

    def __repr__(self):
        return f'<ExampleTranslation example={self.example_id} translation={self.translation_id}>'
