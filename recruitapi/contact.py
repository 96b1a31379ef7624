"""Contact form submissions."""

from __future__ import annotations

from dataclasses import dataclass

from recruitapi.common import ValidationError, is_valid_email


@dataclass
class Contact:
    """A message sent through the contact form."""

    name: str = ""
    email: str = ""
    message: str = ""

    def validate(self) -> None:
        """Raise ValidationError if a field is missing or the e-mail is malformed."""
        problems = []
        if not self.name:
            problems.append("Name")
        if not is_valid_email(self.email):
            problems.append("Email")
        if not self.message:
            problems.append("Message")
        if problems:
            raise ValidationError(
                f"contact validation failed: missing or invalid fields: {', '.join(problems)}"
            )