from models import db
from models.enums import LanguageCode, SourceType
from datetime import datetime, timezone


class Definition(db.Model):
    """Definition model - a sense of one or more words, with its label-derived notes"""
    __tablename__ = 'definitions'

    id = db.Column(db.Integer, primary_key=True)

    definition = db.Column(db.Text, nullable=False)
    language_code = db.Column(db.Enum(LanguageCode, name='language_code'), nullable=False)
    source = db.Column(db.Enum(SourceType, name='source_type'), nullable=False)

    # "sls" - subject area or regional/usage status, e.g. "MEDICIN; slang"
    subject_status_labels = db.Column(db.String(255))
    # "lbs" - general labels, e.g. "talemåde (idiom/proverb)"
    general_labels = db.Column(db.String(255))
    # "gram" - grammatical note
    grammatical_note = db.Column(db.String(255))
    # "usg" - usage note
    usage_note = db.Column(db.String(255))

    is_in_short_def = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    examples = db.relationship('DefinitionExample', back_populates='definition',
                               order_by='DefinitionExample.id', lazy='dynamic')
    translations = db.relationship('DefinitionTranslation', back_populates='definition', lazy='dynamic')

    __table_args__ = (
        db.UniqueConstraint('definition', 'language_code', 'source', name='uq_definition_language_source'),
    )

    def __repr__(self):
        return f'<Definition {self.id} ({self.language_code.value if self.language_code else None})>'


class DefinitionExample(db.Model):
    """Example sentence belonging to a definition"""
    __tablename__ = 'definition_examples'

    id = db.Column(db.Integer, primary_key=True)

    definition_id = db.Column(db.Integer, db.ForeignKey('definitions.id'), nullable=False, index=True)
    example = db.Column(db.Text, nullable=False)
    language_code = db.Column(db.Enum(LanguageCode, name='language_code'), nullable=False)

    grammatical_note = db.Column(db.String(255))
    # Formatted citation, e.g. "{bc}short {it}Politiken{/it} {bc}full {it}...{/it}"
    source_of_example = db.Column(db.String(255))

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    definition = db.relationship('Definition', back_populates='examples')
    translations = db.relationship('ExampleTranslation', back_populates='example', lazy='dynamic')

    __table_args__ = (
        db.UniqueConstraint('definition_id', 'example', name='uq_definition_example'),
    )

    def __repr__(self):
        return f'<DefinitionExample {self.id} definition_id={self.definition_id}>'
