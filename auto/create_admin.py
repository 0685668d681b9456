#!/usr/bin/env python3
"""
Create Admin User Script.

Creates an admin user directly in the database and prints its API key.
Useful for initial setup when no admin exists, or when public registration
is assigned a non-admin role.

Usage:
    uv run python auto/create_admin.py
    uv run python auto/create_admin.py --email admin@example.com --password Secret123

Environment Variables:
    ADMIN_EMAIL: Admin email (default: admin@example.com)
    ADMIN_PASSWORD: Admin password (default: prompt, or auto-generated)
"""

from argparse import ArgumentParser, Namespace
from asyncio import run as asyncio_run
from dataclasses import dataclass
from getpass import getpass
from os import environ
from pathlib import Path
from secrets import token_urlsafe
from sys import exit as sys_exit
from sys import path as sys_path
from uuid import uuid4

project_root = Path(__file__).parent.parent
sys_path.insert(0, str(project_root))

from app.configs import ADMIN_ROLE  # noqa: E402
from app.configs.settings import MIN_PASSWORD_LENGTH  # noqa: E402
from app.db import init_db, transaction  # noqa: E402
from app.errors import DuplicateEntryError  # noqa: E402
from app.managers.password_manager import hash_password  # noqa: E402
from app.models import AdminUserDB  # noqa: E402
from app.repositories import AdminUserRepository  # noqa: E402
from app.utils.helpers import is_valid_email  # noqa: E402


@dataclass(frozen=True)
class AdminUserData:
    """
    Admin user creation data.

    Attributes
    ----------
    email : str
        Admin email address.
    password : str
        Admin password (will be hashed).
    auto_generated : bool
        Whether the password was generated by this script.
    """

    email: str
    password: str
    auto_generated: bool = False


def generate_secure_password(length: int = 16) -> str:
    return token_urlsafe(length)


def input_password() -> str:
    """Prompt twice for a password of at least the minimum length."""
    while True:
        password = getpass("Enter password (leave empty to auto-generate): ")
        if not password:
            return ""
        if len(password) < MIN_PASSWORD_LENGTH:
            print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters.")
            continue
        if password != getpass("Confirm password: "):
            print("❌ Passwords do not match.")
            continue
        return password


def gather_input(args: Namespace) -> AdminUserData:
    """
    Resolve email and password from arguments, environment or prompts.

    Raises
    ------
    ValueError
        If the email is malformed or the password too short.
    """
    email = args.email or environ.get("ADMIN_EMAIL", "admin@example.com")
    if not is_valid_email(email):
        msg = f"Invalid email address: {email}"
        raise ValueError(msg)

    password = args.password or environ.get("ADMIN_PASSWORD", "")
    if not password and not args.no_input:
        password = input_password()
    if not password:
        return AdminUserData(email, generate_secure_password(), auto_generated=True)
    if len(password) < MIN_PASSWORD_LENGTH:
        msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        raise ValueError(msg)
    return AdminUserData(email, password)


async def create_admin_user(admin_data: AdminUserData) -> AdminUserDB:
    """
    Create an admin user in the database.

    Raises
    ------
    ValueError
        If a user with this email already exists.
    """
    await init_db()
    async with transaction() as session:
        repo = AdminUserRepository(session)
        if await repo.get_by_email(admin_data.email):
            msg = f"User with email '{admin_data.email}' already exists"
            raise ValueError(msg)
        try:
            return await repo.create(
                {
                    "email": admin_data.email,
                    "password_hash": await hash_password(admin_data.password),
                    "api_key": str(uuid4()),
                    "role": ADMIN_ROLE,
                },
            )
        except DuplicateEntryError as e:
            msg = f"User with email '{admin_data.email}' already exists"
            raise ValueError(msg) from e


def display_success(admin: AdminUserDB, admin_data: AdminUserData) -> None:
    print("\n✅ Admin user created successfully!")
    print(f"   ID:      {admin.id}")
    print(f"   Email:   {admin.email}")
    print(f"   Role:    {admin.role}")
    print(f"   API key: {admin.api_key}")
    if admin_data.auto_generated:
        print(f"   Password: {admin_data.password}")
        print("\n⚠️  NOTE: This password was auto-generated. Save it now!")
    print("\nYou can now login with:")
    print("  curl -X POST 'http://localhost:8000/api/auth/login' \\")
    print("    -H 'Content-Type: application/json' \\")
    print(f"    -d '{{\"email\": \"{admin.email}\", \"password\": \"YOUR_PASSWORD\"}}'")


def parse_args() -> Namespace:
    parser = ArgumentParser(description="Create an admin user for the Blog API")
    parser.add_argument("--email", help="Admin email address")
    parser.add_argument("--password", help="Admin password (prompted when omitted)")
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; auto-generate the password if none is given",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    try:
        admin_data = gather_input(args)
        admin = asyncio_run(create_admin_user(admin_data))
    except ValueError as e:
        print(f"❌ {e}")
        sys_exit(1)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys_exit(130)
    display_success(admin, admin_data)


if __name__ == "__main__":
    main()
