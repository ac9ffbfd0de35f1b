"""EmailAddress value object for user contact addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from ordering.domain import ordering


@ordering.value_object(part_of="User")
class EmailAddress:
    """A structurally valid email address: one @, non-empty local and domain parts."""

    address: String(required=True, max_length=100)

    @invariant.post
    def verify_email_address(self):
        email = self.address
        if email is None:
            return

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)
        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if ".." in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
