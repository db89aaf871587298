import secrets
import string


def generate_secure_password(length=12):
    """Random password with at least one upper, lower, digit and symbol."""
    length = max(length, 8)

    uppercase = string.ascii_uppercase
    lowercase = string.ascii_lowercase
    digits = string.digits
    special = "!@#$%^&*"

    password_chars = [secrets.choice(pool) for pool in (uppercase, lowercase, digits, special)]

    all_chars = uppercase + lowercase + digits + special
    password_chars.extend(secrets.choice(all_chars) for _ in range(length - 4))
    secrets.SystemRandom().shuffle(password_chars)

    return ''.join(password_chars)
