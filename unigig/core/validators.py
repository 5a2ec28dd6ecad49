"""
Input validation and sanitization utilities
"""
import re
from typing import Optional

from unigig.core.exceptions import ValidationError

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


class InputValidator:
    """Centralized input validation and sanitization"""

    @staticmethod
    def sanitize_string(text: Optional[str], max_length: Optional[int] = None) -> str:
        """Strip markup characters and collapse whitespace"""
        if not text:
            return ""

        sanitized = re.sub(r"[<>]", "", text.strip())
        sanitized = re.sub(r'\s+', ' ', sanitized)

        if max_length and len(sanitized) > max_length:
            sanitized = sanitized[:max_length]

        return sanitized

    @staticmethod
    def validate_email(email: str) -> str:
        """Validate and normalize email address"""
        if not email:
            raise ValidationError("Email is required")

        email = email.strip().lower()
        if not re.match(EMAIL_PATTERN, email):
            raise ValidationError("Invalid email format")

        return email

    @staticmethod
    def validate_password(password: str) -> str:
        if not password or not password.strip():
            raise ValidationError("Password is required")

        if len(password) < 8:
            raise ValidationError("Password must be at least 8 characters long")

        # bcrypt only reads the first 72 bytes
        if len(password.encode("utf-8")) > 72:
            raise ValidationError("Password must be at most 72 bytes")

        return password

    @staticmethod
    def validate_display_name(name: str) -> str:
        """Student full name or employer company name"""
        name = InputValidator.sanitize_string(name, max_length=200)
        if len(name) < 2:
            raise ValidationError("Name must be at least 2 characters long")
        return name

    @staticmethod
    def validate_budget(budget_min, budget_max) -> None:
        for value in (budget_min, budget_max):
            if value is not None and value < 0:
                raise ValidationError("Budget cannot be negative")
        if budget_min is not None and budget_max is not None and budget_min > budget_max:
            raise ValidationError("Minimum budget cannot exceed maximum budget")
