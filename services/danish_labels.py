"""Mapping of Danish dictionary vocabulary (parts of speech, genders, labels) onto the schema"""
from typing import Dict, List, Optional, Union

from models.enums import Gender, PartOfSpeech, RelationshipType

LabelValue = Union[List[str], bool, str]

# Danish part of speech (first element of word.partOfSpeech)
DANISH_POS_MAP: Dict[str, PartOfSpeech] = {
    'substantiv': PartOfSpeech.noun,
    'verbum': PartOfSpeech.verb,
    'adjektiv': PartOfSpeech.adjective,
    'adj. pl.': PartOfSpeech.adjective,
    'adverbium': PartOfSpeech.adverb,
    'pronomen': PartOfSpeech.pronoun,
    'præposition': PartOfSpeech.preposition,
    'konjunktion': PartOfSpeech.conjunction,
    'interjektion': PartOfSpeech.interjection,
    'talord (mængdetal)': PartOfSpeech.numeral,
    'talord (ordenstal)': PartOfSpeech.numeral,
    'talord': PartOfSpeech.numeral,
    'artikel': PartOfSpeech.article,
    'udråbsord': PartOfSpeech.exclamation,
    'forkortelse': PartOfSpeech.abbreviation,
    'suffiks': PartOfSpeech.undefined,
    'sidsteled': PartOfSpeech.undefined,
    'undefined': PartOfSpeech.undefined,
}

DANISH_GENDER_MAP: Dict[str, Gender] = {
    'fælleskøn': Gender.common,
    'intetkøn': Gender.neuter,
}

# Abbreviated part of speech used by stem entries
STEM_POS_MAP: Dict[str, PartOfSpeech] = {
    'sb.': PartOfSpeech.noun,
    'vb.': PartOfSpeech.verb,
    'adj.': PartOfSpeech.adjective,
    'adv.': PartOfSpeech.adverb,
    'præp.': PartOfSpeech.preposition,
    'konj.': PartOfSpeech.conjunction,
    'pron.': PartOfSpeech.pronoun,
    'interj.': PartOfSpeech.interjection,
    'num.': PartOfSpeech.numeral,
}

SUBJECT_DOMAINS = [
    'MEDICIN',
    'JURA',
    'TEKNIK',
    'KEMI',
    'MATEMATIK',
    'MUSIK',
    'SPORT',
    'BOTANIK',
    'ZOOLOGI',
    'ØKONOMI',
    'POLITIK',
    'RELIGION',
    'MILITÆR',
    'LITTERATUR',
    'ASTRONOMI',
    'GASTRONOMI',
    'SØFART',
]

RELATIONSHIP_DESCRIPTIONS: Dict[RelationshipType, str] = {
    RelationshipType.definite_form_da: 'Definite form (bestemt form)',
    RelationshipType.plural_da: 'Plural form (flertal)',
    RelationshipType.plural_definite_da: 'Plural definite form (bestemt form flertal)',
    RelationshipType.present_tense_da: 'Present tense form (nutid)',
    RelationshipType.past_tense_da: 'Past tense form (datid)',
    RelationshipType.past_participle_da: 'Past participle form (tillægsform)',
    RelationshipType.imperative_da: 'Imperative form (bydeform)',
    RelationshipType.comparative_da: 'Comparative form (komparativ)',
    RelationshipType.superlative_da: 'Superlative form (superlativ)',
    RelationshipType.synonym: 'Synonym relationship',
    RelationshipType.antonym: 'Antonym relationship',
    RelationshipType.stem: 'Stem relationship',
    RelationshipType.phrase: 'Phrase',
}


def map_danish_pos(danish_term: Optional[str]) -> PartOfSpeech:
    """Map a Danish part of speech ("substantiv", "verbum", ...) to PartOfSpeech."""
    if not danish_term:
        return PartOfSpeech.undefined
    return DANISH_POS_MAP.get(danish_term.lower().strip(), PartOfSpeech.undefined)


def map_danish_gender(danish_term: Optional[str]) -> Optional[Gender]:
    if not danish_term:
        return None
    return DANISH_GENDER_MAP.get(danish_term.lower().strip())


def map_stem_pos(stem_pos: Optional[str]) -> PartOfSpeech:
    if not stem_pos:
        return PartOfSpeech.undefined
    return STEM_POS_MAP.get(stem_pos.lower().strip(), PartOfSpeech.undefined)


def get_relationship_description(relationship_type: RelationshipType) -> Optional[str]:
    return RELATIONSHIP_DESCRIPTIONS.get(relationship_type)


def _is_flag(value: Optional[LabelValue]) -> bool:
    # Flag labels arrive as true or as an empty string
    return value is True or value == ''


def extract_usage_note(labels: Optional[Dict[str, LabelValue]]) -> Optional[str]:
    """
    Build the usage note from SPROGBRUG and overført labels.

    Args:
        labels: Definition labels from the Danish dictionary

    Returns:
        Notes joined with '; ', or None if the labels carry no usage information
    """
    if not labels:
        return None

    usage_notes = []

    sprogbrug = labels.get('SPROGBRUG')
    if sprogbrug:
        if isinstance(sprogbrug, str):
            usage_notes.append(sprogbrug)
        elif isinstance(sprogbrug, list):
            usage_notes.append('; '.join(sprogbrug))
        else:
            usage_notes.append('SPROGBRUG')

    if _is_flag(labels.get('overført')):
        usage_notes.append('overført (figurative/metaphorical usage)')

    return '; '.join(usage_notes) if usage_notes else None


def extract_grammatical_note(labels: Optional[Dict[str, LabelValue]]) -> Optional[str]:
    if not labels:
        return None

    grammatik = labels.get('grammatik')
    if isinstance(grammatik, str) and grammatik:
        return grammatik
    if isinstance(grammatik, list) and grammatik:
        return '; '.join(grammatik)
    return None


def extract_general_labels(labels: Optional[Dict[str, LabelValue]]) -> Optional[str]:
    if not labels:
        return None

    general_labels = []

    if _is_flag(labels.get('talemåde')):
        general_labels.append('talemåde (idiom/proverb)')

    if labels.get('Forkortelse'):
        general_labels.append('forkortelse (abbreviation)')

    return '; '.join(general_labels) if general_labels else None


def extract_subject_status_labels(labels: Optional[Dict[str, LabelValue]]) -> Optional[str]:
    """Collect subject domains (MEDICIN, JURA, ...) and the slang flag."""
    if not labels:
        return None

    subject_labels = [domain for domain in SUBJECT_DOMAINS if labels.get(domain)]

    if _is_flag(labels.get('slang')):
        subject_labels.append('slang')

    return '; '.join(subject_labels) if subject_labels else None


def label_list(labels: Optional[Dict[str, LabelValue]], key: str) -> List[str]:
    """Return a label's value when it is a list of words, otherwise an empty list."""
    if not labels:
        return []
    value = labels.get(key)
    return list(value) if isinstance(value, list) else []
