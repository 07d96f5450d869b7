"""
Translation Service client

Sends a word with its definitions, examples and stems to the dictionary translation
service and returns the first element of its response. The service fills the empty
translation slots of the request and may add a Danish dictionary object.

Request body (a one-element list):
[{
    "metadata": {"languageCode": "en", "languageCode_translation": "da", "sourceTranslator": "Helsinki-NLP"},
    "word": {"wordId": 1, "word": "dog", "phonetic": "dɔg", "word_translation": "", ...},
    "definitions": [{"definitionId": 10, "partOfSpeech": "noun", "definition": "...",
                     "definition_translation": "", "examples": [...]}],
    "stems": ["dog"],
    "stems_translation": [""]
}]
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from flask import current_app, has_app_context

from services.payload_models import (
    TranslationMetadata,
    TranslationWord,
    TranslationExample,
    TranslationDefinition,
    TranslationRequest,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'http://127.0.0.1:5000/process_dictionary'
DEFAULT_TIMEOUT = 60


class TranslationClient:
    """HTTP client for the dictionary translation service."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[int] = None,
        source_language: Optional[str] = None,
        target_language: Optional[str] = None,
        source_translator: Optional[str] = None
    ):
        app_config = current_app.config if has_app_context() else {}

        self.api_url = api_url or app_config.get('TRANSLATION_API_URL', DEFAULT_API_URL)
        self.timeout = timeout or app_config.get('TRANSLATION_API_TIMEOUT', DEFAULT_TIMEOUT)
        self.source_language = source_language or app_config.get('TRANSLATION_SOURCE_LANGUAGE', 'en')
        self.target_language = target_language or app_config.get('TRANSLATION_TARGET_LANGUAGE', 'da')
        self.source_translator = source_translator or app_config.get('TRANSLATION_SOURCE_TRANSLATOR', 'Helsinki-NLP')

    def build_request(
        self,
        word_id: int,
        word: str,
        phonetic: Optional[str],
        definitions: List[Dict[str, Any]],
        stems: List[str],
        related_words: List[Dict[str, str]]
    ) -> TranslationRequest:
        """Build the request with every translation slot left empty."""
        return TranslationRequest(
            metadata=TranslationMetadata(
                language_code=self.source_language,
                language_code_translation=self.target_language,
                source_translator=self.source_translator
            ),
            word=TranslationWord(
                word_id=word_id,
                word=word,
                phonetic=phonetic,
                word_translation='',
                phonetic_translation='',
                source_translator=self.source_translator,
                word_variants=[],
                related_words=[
                    {
                        'type': related['type'],
                        'word': related['word'],
                        f"{'synonym' if related['type'] == 'synonym' else 'antonym'}_translation": ''
                    }
                    for related in related_words
                ]
            ),
            definitions=[
                TranslationDefinition(
                    definition_id=definition['id'],
                    part_of_speech=definition.get('partOfSpeech') or 'undefined',
                    definition=definition['definition'],
                    definition_translation='',
                    examples=[
                        TranslationExample(
                            example_id=example['id'],
                            example=example['example'],
                            example_translation=''
                        )
                        for example in definition.get('examples', [])
                    ]
                )
                for definition in definitions
            ],
            stems=stems,
            stems_translation=['' for _ in stems]
        )

    def translate_word_data(
        self,
        word_id: int,
        word: str,
        phonetic: Optional[str],
        definitions: List[Dict[str, Any]],
        stems: Optional[List[str]] = None,
        related_words: Optional[List[Dict[str, str]]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Ask the translation service to translate a word and its definitions.

        Args:
            word_id: Id of the source word
            word: Source word text
            phonetic: Phonetic transcription of the source word
            definitions: [{id, partOfSpeech, definition, examples: [{id, example}]}]
            stems: Stems of the source word
            related_words: [{type, word}] synonyms/antonyms to translate

        Returns:
            The raw first element of the response, with `english_word_data` and
            `translation_word_for_danish_dictionary`, or None if the service
            could not be reached or returned nothing usable
        """
        translation_request = self.build_request(
            word_id, word, phonetic, definitions, stems or [], related_words or []
        )
        payload = [translation_request.model_dump(by_alias=True)]

        logger.debug(f"Sending translation request for '{word}' to {self.api_url}")

        try:
            response = requests.post(self.api_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Translation error for word {word}: {str(e)}")
            return None
        except ValueError as e:
            logger.error(f"Translation service returned invalid JSON for word {word}: {str(e)}")
            return None

        if not isinstance(data, list) or len(data) == 0 or not isinstance(data[0], dict):
            logger.warning(f"Translation service returned no data for word {word}")
            return None

        logger.info(f"Received translation data for word '{word}'")
        return data[0]
