"""Print a signup token that lets a user create their own profile.

Run from the backend directory with the same SESSION_SECRET as the API:
    python scripts/issue_signup_token.py <user-id> [--ttl-minutes 30]

The frontend sends it as the X-Signup-Token header on POST /profile.
"""
import argparse
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dashboard.core.security import create_signup_token  # noqa: E402


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id")
    parser.add_argument("--ttl-minutes", type=int, default=None)
    args = parser.parse_args(argv)
    ttl = timedelta(minutes=args.ttl_minutes) if args.ttl_minutes else None
    print(create_signup_token(args.user_id, expires_delta=ttl))


if __name__ == "__main__":
    main()
