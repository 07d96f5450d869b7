import logging

from flask import Blueprint, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from services.dictionary_validator import DictionaryValidationError
from services.word_translation_service import import_translations_for_word_id
from services.danish_word_service import process_danish_variant

bp = Blueprint('dictionary', __name__, url_prefix='/dictionary')

logger = logging.getLogger(__name__)


@bp.route('/words/<int:word_id>/translations', methods=['POST'])
def import_word_translations(word_id):
    """
    Import machine translations for a stored word.

    Response:
    {
        "success": true,
        "result": {
            "word_id": 1,
            "word": "hund",
            "translated_word_id": 7,
            "variant_word_ids": [],
            "definition_translations": 2,
            "example_translations": 2,
            "skipped_definitions": 0,
            "skipped_expressions": 0,
            "conflict": false
        }
    }
    """
    try:
        result = import_translations_for_word_id(word_id)
    except LookupError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 404
    except DictionaryValidationError as e:
        return jsonify({
            'success': False,
            'error': str(e),
            'field': e.field
        }), 422
    except SQLAlchemyError as e:
        logger.error(f"Translation import failed for word {word_id}: {str(e)}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Database error while importing translations'
        }), 500

    if result is None:
        return jsonify({
            'success': False,
            'error': 'Translation service returned no data'
        }), 502

    return jsonify({
        'success': True,
        'result': result.to_dict()
    }), 200


@bp.route('/danish-variants', methods=['POST'])
def add_danish_variant():
    """
    Save one Danish dictionary entry and its English translations.

    Request body:
    {
        "variant": {"word": {"word": "hund", "partOfSpeech": ["substantiv", "fælleskøn"], ...},
                    "definition": [...], "fixed_expressions": [...]},
        "original_word": "hund"  // optional, defaults to the variant's word
    }

    Response:
    {
        "word_display": "word: hund variant:  partOfSpeech: [...] forms: [...]",
        "status": "added",
        "language": "da",
        "word_id": 3
    }
    """
    data = request.get_json(silent=True)

    if not data or not isinstance(data.get('variant'), dict):
        return jsonify({
            'success': False,
            'error': 'Missing required field: variant'
        }), 400

    variant = data['variant']
    original_word = data.get('original_word') or (variant.get('word') or {}).get('word') or ''

    result = process_danish_variant(variant, original_word)
    status_code = 200 if result['status'] == 'added' else 422
    return jsonify(result), status_code
