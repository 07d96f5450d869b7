import enum


class LanguageCode(str, enum.Enum):
    en = 'en'
    da = 'da'


class SourceType(str, enum.Enum):
    user = 'user'
    merriam_learners = 'merriam_learners'
    danish_dictionary = 'danish_dictionary'
    # Machine translation service (Helsinki-NLP models)
    helsinki_nlp = 'helsinki_nlp'


class RelationshipType(str, enum.Enum):
    related = 'related'
    synonym = 'synonym'
    antonym = 'antonym'
    stem = 'stem'
    composition = 'composition'
    phrase = 'phrase'
    translation = 'translation'

    # Danish word forms
    definite_form_da = 'definite_form_da'
    plural_da = 'plural_da'
    plural_definite_da = 'plural_definite_da'
    common_gender_da = 'common_gender_da'
    neuter_gender_da = 'neuter_gender_da'
    present_tense_da = 'present_tense_da'
    past_tense_da = 'past_tense_da'
    past_participle_da = 'past_participle_da'
    imperative_da = 'imperative_da'
    comparative_da = 'comparative_da'
    superlative_da = 'superlative_da'
    adverbial_form_da = 'adverbial_form_da'
    other_form_da = 'other_form_da'


class PartOfSpeech(str, enum.Enum):
    noun = 'noun'
    verb = 'verb'
    adjective = 'adjective'
    adverb = 'adverb'
    pronoun = 'pronoun'
    preposition = 'preposition'
    conjunction = 'conjunction'
    interjection = 'interjection'
    numeral = 'numeral'
    article = 'article'
    exclamation = 'exclamation'
    abbreviation = 'abbreviation'
    phrase = 'phrase'
    undefined = 'undefined'


class Gender(str, enum.Enum):
    common = 'common'
    neuter = 'neuter'
