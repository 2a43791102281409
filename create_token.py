"""Mint an access token from the command line.

Handy for scripting against the API without going through
``/api/v1/users/login``::

    python create_token.py ana@neuromkt.com --role admin --days 30
"""
import argparse

from neuromkt_api.app.core.fields import normalize_email
from neuromkt_api.app.core.security import ADMIN_ROLE, create_access_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a signed bearer token")
    parser.add_argument("email", help="user email stored in the 'sub' claim")
    parser.add_argument("--role", default=ADMIN_ROLE, help="role claim (default: %(default)s)")
    parser.add_argument("--days", type=int, default=365, help="lifetime in days (default: %(default)s)")
    args = parser.parse_args()

    email = normalize_email(args.email)
    if not email:
        parser.error("email must not be empty")
    token = create_access_token({"sub": email, "role": args.role}, expires_delta=args.days * 24 * 60 * 60)
    print(token)


if __name__ == "__main__":
    main()
