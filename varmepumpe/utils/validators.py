"""
Validation utilities
"""
import re


def validate_email(email):
    """
    Validate email format

    Args:
        email (str): Email address to validate

    Returns:
        bool: True if valid, False otherwise
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_phone(phone):
    """
    Validate a Norwegian phone number

    Accepts eight digits with an optional +47 / 0047 country prefix;
    spaces, dashes and dots are ignored.

    Args:
        phone (str): Phone number to validate

    Returns:
        bool: True if valid, False otherwise
    """
    if not phone:
        return False

    cleaned = re.sub(r'[\s\-\(\)\.]', '', phone)
    return bool(re.match(r'^(\+47|0047)?\d{8}$', cleaned))


def validate_postal_code(postal_code):
    """
    Validate a Norwegian postal code (exactly four digits)

    Args:
        postal_code (str): Postal code to validate

    Returns:
        bool: True if valid, False otherwise
    """
    if not postal_code:
        return False

    return bool(re.match(r'^\d{4}$', postal_code))


def validate_org_number(org_number):
    """Organisation numbers from Brønnøysundregistrene are nine digits"""
    if not org_number:
        return False

    return bool(re.match(r'^\d{9}$', org_number))


def validate_password(password, min_length):
    """
    Validate password length against the single configured policy

    Returns:
        tuple: (is_valid, error_message)
    """
    if not password or len(password) < min_length:
        return False, f'Password must be at least {min_length} characters'
    return True, None
