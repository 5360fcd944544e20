"""
Postal code reference table: CRUD, search, bulk import and seeding.
"""
import logging

from flask import current_app
from sqlalchemy import or_

from varmepumpe import db
from varmepumpe.data.postal_codes import NORWEGIAN_POSTAL_CODES
from varmepumpe.errors import ConflictError, NotFoundError, ValidationError
from varmepumpe.models import PostalCode
from varmepumpe.schemas import PostalCodeInput
from varmepumpe.services import unit_of_work

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 50


def list_postal_codes():
    return PostalCode.query.order_by(PostalCode.postal_code).all()


def search(term):
    """Codes containing ``term``, or places/municipalities containing it in any case"""
    term = (term or '').strip()
    if not term:
        return []
    pattern = f'%{term}%'
    return (
        PostalCode.query
        .filter(or_(
            PostalCode.postal_code.like(pattern),
            PostalCode.post_place.ilike(pattern),
            PostalCode.municipality.ilike(pattern),
        ))
        .order_by(PostalCode.postal_code)
        .limit(SEARCH_LIMIT)
        .all()
    )


def get_by_code(code):
    postal_code = PostalCode.query.filter_by(postal_code=code).first()
    if postal_code is None:
        raise NotFoundError('Postal code not found')
    return postal_code


def get_postal_code(postal_code_id):
    postal_code = db.session.get(PostalCode, postal_code_id)
    if postal_code is None:
        raise NotFoundError('Postal code not found')
    return postal_code


def _code_taken(code, exclude_id=None):
    query = PostalCode.query.filter(PostalCode.postal_code == code)
    if exclude_id is not None:
        query = query.filter(PostalCode.id != exclude_id)
    return query.first() is not None


def create_postal_code(data):
    if _code_taken(data.postal_code):
        raise ConflictError(f'Postal code {data.postal_code} already exists', field='postal_code')

    postal_code = PostalCode(**data.as_dict())
    with unit_of_work() as session:
        session.add(postal_code)
    logger.info('Postal code %s created', postal_code.postal_code)
    return postal_code


def update_postal_code(postal_code_id, update):
    """
    Args:
        update (PostalCodeUpdate): validated changes; only those fields change
    """
    postal_code = get_postal_code(postal_code_id)
    values = update.changes
    if values.get('postal_code') and _code_taken(values['postal_code'], exclude_id=postal_code.id):
        raise ConflictError(f'Postal code {values["postal_code"]} already exists', field='postal_code')

    with unit_of_work():
        for key, value in values.items():
            setattr(postal_code, key, value)
    logger.info('Postal code %s updated', postal_code.postal_code)
    return postal_code


def delete_postal_code(postal_code_id):
    postal_code = get_postal_code(postal_code_id)
    with unit_of_work() as session:
        session.delete(postal_code)
    logger.info('Postal code %s deleted', postal_code.postal_code)


def _import_row(row, values):
    """Apply one valid row; returns 'created' or 'updated'"""
    target = None
    row_id = row.get('id')
    if isinstance(row_id, int) and not isinstance(row_id, bool):
        target = db.session.get(PostalCode, row_id)
    if target is None:
        target = PostalCode.query.filter_by(postal_code=values['postal_code']).first()

    if target is None:
        db.session.add(PostalCode(**values))
        return 'created'

    if _code_taken(values['postal_code'], exclude_id=target.id):
        raise ConflictError(f'postal code {values["postal_code"]} already exists')
    for key, value in values.items():
        setattr(target, key, value)
    return 'updated'


def import_rows(rows):
    """
    Bulk upsert. Rows are matched by ``id``, then by postal code, otherwise
    created. Invalid rows are skipped and reported as ``Row N: ...`` with N
    counted from 1.

    Returns:
        dict: created, updated, errors (capped at MAX_IMPORT_ERRORS), error_count
    """
    if not isinstance(rows, list):
        raise ValidationError({'data': 'data must be an array of rows'})

    created = updated = 0
    errors = []
    with unit_of_work():
        for number, row in enumerate(rows, start=1):
            values, row_errors = PostalCodeInput.collect(row)
            if row_errors:
                errors.append(f'Row {number}: {"; ".join(row_errors.values())}')
                continue
            try:
                outcome = _import_row(row, values)
            except ConflictError as e:
                errors.append(f'Row {number}: {e.message}')
                continue
            if outcome == 'created':
                created += 1
            else:
                updated += 1

    limit = current_app.config['MAX_IMPORT_ERRORS']
    logger.info('Postal code import: %d created, %d updated, %d error(s)', created, updated, len(errors))
    return {
        'created': created,
        'updated': updated,
        'errors': errors[:limit],
        'error_count': len(errors),
    }


def seed_postal_codes():
    """Insert the reference list when the table is empty; returns rows inserted"""
    if PostalCode.query.first() is not None:
        return 0

    with unit_of_work() as session:
        for entry in NORWEGIAN_POSTAL_CODES:
            session.add(PostalCode(**entry))
    logger.info('Seeded %d postal codes', len(NORWEGIAN_POSTAL_CODES))
    return len(NORWEGIAN_POSTAL_CODES)
