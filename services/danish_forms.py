"""
Danish Word Forms

Expands the compact inflection notation of the Danish dictionary into full word forms,
each tagged with the relationship(s) it has to the headword.

    transform_danish_forms('hund', ['-en', '-e', '-ene'], ['substantiv', 'fælleskøn'])
    -> [{'word': 'hunden', 'relationships': [definite_form_da, common_gender_da], ...},
        {'word': 'hunde', 'relationships': [plural_da], ...},
        {'word': 'hundene', 'relationships': [plural_definite_da], ...}]
"""

import re
from typing import Dict, List, Optional

from models.enums import RelationshipType

COMMON_GENDER_TAGS = ('fælleskøn', 'intetkønellerfælleskøn', 'fælleskønellerintetkøn')
NEUTER_GENDER_TAGS = ('intetkøn', 'intetkønellerfælleskøn', 'fælleskønellerintetkøn')


def apply_ending(base_word: str, ending: str) -> str:
    """
    Apply an inflection ending to a base word.

    "-en" appends to the base word, "..ste" is a complete form written with a
    continuation prefix, and anything else is already a complete form.
    """
    if not ending:
        return base_word

    if not ending.startswith('-'):
        if ending.startswith('..'):
            return ending[2:]
        return ending

    return base_word + ending[1:]


def _add(relations: List[Dict], related_word: str, relationship_type: RelationshipType,
         definition_numbers: Optional[List[int]] = None):
    relation = {'related_word': related_word, 'relationship_type': relationship_type}
    if definition_numbers:
        relation['definition_numbers'] = definition_numbers
    relations.append(relation)


def _noun_forms(base_word: str, forms: List[str], part_of_speech: List[str]) -> List[Dict]:
    relations = []
    has_common = 'fælleskøn' in part_of_speech
    has_neuter = 'intetkøn' in part_of_speech

    # Definite singular (bestemt form ental)
    if len(forms) >= 1 and forms[0]:
        definite = apply_ending(base_word, forms[0])
        _add(relations, definite, RelationshipType.definite_form_da)

        if has_common or (not has_neuter and forms[0].endswith('-en')):
            _add(relations, definite, RelationshipType.common_gender_da)
        elif has_neuter or forms[0].endswith('-et'):
            _add(relations, definite, RelationshipType.neuter_gender_da)

    # Indefinite plural (ubestemt form flertal)
    if len(forms) >= 2 and forms[1]:
        _add(relations, apply_ending(base_word, forms[1]), RelationshipType.plural_da)

    # Definite plural (bestemt form flertal)
    if len(forms) >= 3 and forms[2]:
        _add(relations, apply_ending(base_word, forms[2]), RelationshipType.plural_definite_da)

    return relations


def _contextual_noun_forms(base_word: str, contextual_forms: Dict[str, List[str]],
                           part_of_speech: List[str]) -> List[Dict]:
    relations = []
    has_common = any(tag in part_of_speech for tag in COMMON_GENDER_TAGS)
    has_neuter = any(tag in part_of_speech for tag in NEUTER_GENDER_TAGS)

    for context_key, entries in contextual_forms.items():
        if not entries:
            continue

        # "betydning 1 og 6" -> forms apply to definitions 1 and 6
        definition_numbers = []
        if 'betydning' in context_key:
            definition_numbers = [int(number) for number in re.findall(r'\d+', context_key)]

        for index, entry in enumerate(entries):
            if not entry:
                continue

            related_word = apply_ending(base_word, entry)
            if related_word == base_word:
                continue

            if entry.endswith('-en') and '/' not in entry:
                _add(relations, related_word, RelationshipType.definite_form_da, definition_numbers)
                if has_common:
                    _add(relations, related_word, RelationshipType.common_gender_da, definition_numbers)
            elif entry.endswith('-et') and '/' not in entry:
                _add(relations, related_word, RelationshipType.definite_form_da, definition_numbers)
                if has_neuter:
                    _add(relations, related_word, RelationshipType.neuter_gender_da, definition_numbers)
            elif entry in ('-e', '-er') or ((entry.endswith('-e') or entry.endswith('-er')) and index == 1):
                _add(relations, related_word, RelationshipType.plural_da, definition_numbers)
            elif entry in ('-ene', '-erne') or ((entry.endswith('-ene') or entry.endswith('-erne')) and index == 2):
                _add(relations, related_word, RelationshipType.plural_definite_da, definition_numbers)

    return relations


def _adjective_forms(base_word: str, forms: List[str]) -> List[Dict]:
    relations = []

    if len(forms) >= 3:
        types = [
            RelationshipType.comparative_da,
            RelationshipType.superlative_da,
            RelationshipType.adverbial_form_da,
        ]
        for form, relationship_type in zip(forms[:3], types):
            if form:
                _add(relations, apply_ending(base_word, form), relationship_type)
    else:
        for index, form in enumerate(forms):
            if form:
                relationship_type = RelationshipType.comparative_da if index == 0 else RelationshipType.superlative_da
                _add(relations, apply_ending(base_word, form), relationship_type)

    return relations


def _verb_forms(base_word: str, forms: List[str]) -> List[Dict]:
    relations = []

    if len(forms) >= 4:
        types = [
            RelationshipType.present_tense_da,
            RelationshipType.past_tense_da,
            RelationshipType.past_participle_da,
            RelationshipType.imperative_da,
        ]
        for form, relationship_type in zip(forms[:4], types):
            if form:
                _add(relations, apply_ending(base_word, form), relationship_type)
    else:
        types = [
            RelationshipType.present_tense_da,
            RelationshipType.past_tense_da,
            RelationshipType.past_participle_da,
        ]
        for index, form in enumerate(forms):
            if form:
                relationship_type = types[index] if index < len(types) else RelationshipType.other_form_da
                _add(relations, apply_ending(base_word, form), relationship_type)

    return relations


def transform_danish_forms(
    word: str,
    forms: Optional[List[str]],
    part_of_speech: Optional[List[str]],
    contextual_forms: Optional[Dict[str, List[str]]] = None
) -> List[Dict]:
    """
    Turn a headword's inflection notation into related word forms.

    Args:
        word: The headword
        forms: Inflection endings from the dictionary, e.g. ["-en", "-e", "-ene"]
        part_of_speech: Danish part of speech list, e.g. ["substantiv", "fælleskøn"]
        contextual_forms: Noun forms grouped by context, used when `forms` is empty

    Returns:
        List of dicts, one per distinct form, in first-seen order:
        - word: str
        - relationships: list of RelationshipType
        - definition_numbers: list of int (definitions the form is restricted to)
    """
    forms = forms or []
    part_of_speech = part_of_speech or []

    if 'substantiv' in part_of_speech:
        if forms:
            relations = _noun_forms(word, forms, part_of_speech)
        elif contextual_forms:
            relations = _contextual_noun_forms(word, contextual_forms, part_of_speech)
        else:
            relations = []
    elif 'adjektiv' in part_of_speech:
        relations = _adjective_forms(word, forms)
    elif 'verbum' in part_of_speech:
        relations = _verb_forms(word, forms)
    else:
        relations = []

    grouped: Dict[str, Dict] = {}
    for relation in relations:
        related_word = relation['related_word']
        if related_word == word:
            continue
        entry = grouped.setdefault(related_word, {
            'word': related_word,
            'relationships': [],
            'definition_numbers': [],
        })
        if relation['relationship_type'] not in entry['relationships']:
            entry['relationships'].append(relation['relationship_type'])
        for number in relation.get('definition_numbers', []):
            if number not in entry['definition_numbers']:
                entry['definition_numbers'].append(number)

    return list(grouped.values())
