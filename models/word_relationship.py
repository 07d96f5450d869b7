from models import db
from models.enums import RelationshipType
from datetime import datetime, timezone


class WordToWordRelationship(db.Model):
    """Directed, typed edge between two words (translation, synonym, plural form, ...)"""
    __tablename__ = 'word_to_word_relationships'

    from_word_id = db.Column(db.Integer, db.ForeignKey('words.id'), primary_key=True)
    to_word_id = db.Column(db.Integer, db.ForeignKey('words.id'), primary_key=True)
    type = db.Column('relationship_type', db.Enum(RelationshipType, name='relationship_type'), primary_key=True)

    # Position of a part inside a composition
    order_index = db.Column(db.Integer)
    description = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    from_word = db.relationship('Word', foreign_keys=[from_word_id])
    to_word = db.relationship('Word', foreign_keys=[to_word_id])

    def __repr__(self):
        return f'<WordToWordRelationship {self.from_word_id} -{self.type.value}-> {self.to_word_id}>'
