from enum import StrEnum

from src.platform.exception.exceptions import InvalidInputError


class UserRole(StrEnum):
    ADMIN = 'ADMIN'
    ORGANIZER = 'ORGANIZER'
    CUSTOMER = 'CUSTOMER'
    STAFF = 'STAFF'

    @classmethod
    def normalize(cls, raw: 'str | UserRole') -> 'UserRole':
        """Accept 'staff', 'Staff', 'ROLE_STAFF' and friends from storage or tokens."""
        if isinstance(raw, UserRole):
            return raw
        value = str(raw).strip().upper()
        if value.startswith('ROLE_'):
            value = value[len('ROLE_') :]
        try:
            return cls(value)
        except ValueError:
            raise InvalidInputError(f'Unknown role: {raw}') from None
