#!/usr/bin/env python3
"""Issue an admin JWT for the configured admin email.

Usage:
    AUTH__ADMIN_EMAIL=me@example.com AUTH__JWT_SECRET=... python scripts/issue_admin_token.py

The token goes in the auth_token cookie or an Authorization: Bearer header.
"""

import sys

from folio.config import Settings
from folio.domain.service import JWTService


def main() -> int:
    settings = Settings()

    if not settings.auth.admin_email:
        print("AUTH__ADMIN_EMAIL is not set", file=sys.stderr)
        return 1

    service = JWTService(auth_settings=settings.auth)
    print(service.create_token(settings.auth.admin_email))
    return 0


if __name__ == "__main__":
    sys.exit(main())
