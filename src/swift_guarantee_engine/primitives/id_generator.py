import uuid


class ReferenceGenerator:
    """
    Generates SWIFT business references (field 20).

    References are ``<PREFIX><random>`` in upper-case alphanumerics and never
    exceed 16 characters, so they always satisfy the reference format rule.
    """

    MAX_LENGTH = 16

    def next_reference(self, prefix: str) -> str:
        """Returns a fresh reference starting with *prefix*."""
        prefix = prefix.upper()
        if not prefix.isalnum() or len(prefix) >= self.MAX_LENGTH:
            raise ValueError(f"Invalid reference prefix: {prefix!r}")
        suffix = uuid.uuid4().hex.upper()
        return (prefix + suffix)[: self.MAX_LENGTH]
