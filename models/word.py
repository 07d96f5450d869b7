from models import db
from models.enums import LanguageCode, PartOfSpeech, Gender, SourceType
from datetime import datetime, timezone
from sqlalchemy.orm import validates


class Word(db.Model):
    """Word model - one row per distinct spelling and language"""
    __tablename__ = 'words'

    id = db.Column(db.Integer, primary_key=True)

    word = db.Column(db.String(255), nullable=False)
    language_code = db.Column(db.Enum(LanguageCode, name='language_code'), nullable=False, index=True)

    phonetic_general = db.Column(db.String(100))
    frequency_general = db.Column(db.Integer)
    is_highlighted = db.Column(db.Boolean, nullable=False, default=False)
    etymology = db.Column(db.Text)
    additional_info = db.Column(db.JSON, default=dict)

    # Source tag, e.g. 'helsinki_nlp' or 'danish_dictionary-hund-noun-'
    source_entity_id = db.Column(db.String(255))

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    details = db.relationship('WordDetails', back_populates='word', lazy='dynamic')

    __table_args__ = (
        db.UniqueConstraint('word', 'language_code', name='uq_word_language'),
    )

    @validates('word')
    def validate_word(self, key, word):
        if not word or not word.strip():
            raise ValueError('Word text cannot be empty or whitespace')
        return word.strip()

    def __repr__(self):
        return f'<Word {self.word} ({self.language_code.value if self.language_code else None})>'


class WordDetails(db.Model):
    """WordDetails model - a word's entry for one part of speech (and dictionary variant)"""
    __tablename__ = 'word_details'

    id = db.Column(db.Integer, primary_key=True)

    word_id = db.Column(db.Integer, db.ForeignKey('words.id'), nullable=False, index=True)
    part_of_speech = db.Column(db.Enum(PartOfSpeech, name='part_of_speech'), nullable=False,
                               default=PartOfSpeech.undefined)

    # Dictionary homograph tag ('1', '2', ...), empty for the main entry
    variant = db.Column(db.String(100), nullable=False, default='')

    gender = db.Column(db.Enum(Gender, name='gender'))
    phonetic = db.Column(db.String(100))
    frequency = db.Column(db.Integer)
    is_plural = db.Column(db.Boolean, nullable=False, default=False)
    source = db.Column(db.Enum(SourceType, name='source_type'), nullable=False, default=SourceType.user)

    # Relationships
    word = db.relationship('Word', back_populates='details')
    definitions = db.relationship('WordDefinition', back_populates='word_details', lazy='dynamic')

    __table_args__ = (
        db.UniqueConstraint('word_id', 'part_of_speech', 'variant', name='uq_word_details_pos_variant'),
    )

    def __repr__(self):
        return f'<WordDetails word_id={self.word_id} pos={self.part_of_speech} variant={self.variant!r}>'


class WordDefinition(db.Model):
    """Join row linking a WordDetails entry to a Definition"""
    __tablename__ = 'word_definitions'

    word_details_id = db.Column(db.Integer, db.ForeignKey('word_details.id'), primary_key=True)
    definition_id = db.Column(db.Integer, db.ForeignKey('definitions.id'), primary_key=True)

    is_primary = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    word_details = db.relationship('WordDetails', back_populates='definitions')
    definition = db.relationship('Definition')

    def __repr__(self):
        return f'<WordDefinition details={self.word_details_id} definition={self.definition_id}>'
