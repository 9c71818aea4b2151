"""
Create a user (e.g. first admin) or reset a password. Run from project root:
  python -m gallery.scripts.create_user USERNAME PASSWORD [role] [--name NAME]
  python -m gallery.scripts.create_user USERNAME NEW_PASSWORD --reset-password
Example:
  python -m gallery.scripts.create_user admin your-secure-password admin --name "Site Admin"
"""
import argparse
import sys

from gallery.core.errors import GalleryError
from gallery.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from gallery.services.user_store import get_user_store


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a gallery user or reset a password (no registration UI).")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    parser.add_argument("--name", default="", help="Display name")
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="Re-hash the password of an existing user instead of creating one",
    )
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    users = get_user_store()
    try:
        if args.reset_password:
            users.set_password_hash(username, hash_password(args.password))
            print(f"Updated password for '{username}'.")
            return 0
        users.add(username, hash_password(args.password), role=args.role, name=args.name)
    except GalleryError as e:
        print(e.message, file=sys.stderr)
        return 1
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
