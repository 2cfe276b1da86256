"""Interactive text front-end for the credential service."""
from __future__ import annotations

from getpass import getpass

from .models import OutcomeKind, User
from .validation import PASSWORD_REQUIREMENTS, is_strong_password, is_valid_email, missing_fields


def run_console(backend) -> None:
    """Drive sign-up, login, password reset and logout against ``backend``.

    ``backend`` is anything exposing the session manager operations: a
    :class:`~authservice.sessions.SessionManager` for an in-process service or
    an :class:`~authservice.client.AuthClient` for a remote one.
    """

    print("Account Console")
    print("Press Ctrl+C at any time to exit.\n")

    try:
        while True:
            user = backend.current_session()
            if user is None:
                keep_running = _welcome_menu(backend)
            else:
                keep_running = _home_menu(backend, user)
            if not keep_running:
                print("Goodbye!")
                return
            print()
    except (KeyboardInterrupt, EOFError):
        print("\nExiting console.")


def _welcome_menu(backend) -> bool:
    print("Select an option:")
    print("  1) Sign up")
    print("  2) Log in")
    print("  3) Forgot password")
    print("  4) Exit")

    choice = input("Enter choice [1-4]: ").strip()
    if choice == "1":
        _sign_up(backend)
    elif choice == "2":
        _log_in(backend)
    elif choice == "3":
        _forgot_password(backend)
    elif choice == "4":
        return False
    else:
        print("Invalid selection. Please choose a number from the menu.")
    return True


def _home_menu(backend, user: User) -> bool:
    print(f"Welcome, {user.full_name}!")
    print(f"Signed in as {user.email}")
    print("  1) Log out")
    print("  2) Exit")

    choice = input("Enter choice [1-2]: ").strip()
    if choice == "1":
        backend.logout()
        print("You have been logged out.")
    elif choice == "2":
        return False
    else:
        print("Invalid selection. Please choose a number from the menu.")
    return True


def _sign_up(backend) -> bool:
    print("\nCreate a new account.")
    first_name = input("First name: ").strip()
    last_name = input("Last name: ").strip()
    email = input("Email address: ").strip()
    password = getpass("Password: ")
    confirm_password = getpass("Confirm password: ")

    if missing_fields(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password,
        confirm_password=confirm_password,
    ):
        print("Please fill in all fields.")
        return False
    if password != confirm_password:
        print("Passwords do not match.")
        return False
    if not is_valid_email(email):
        print("Please enter a valid email address.")
        return False
    if not is_strong_password(password):
        print(PASSWORD_REQUIREMENTS)
        return False

    outcome = backend.register(first_name, last_name, email, password)
    if outcome.kind is OutcomeKind.DUPLICATE_EMAIL:
        print("Sign up failed: a user with this email already exists.")
        return False

    print("Sign up successful. You can now log in with your credentials.")
    return True


def _log_in(backend) -> bool:
    print("\nLog in to your account.")
    email = input("Email address: ").strip()
    password = getpass("Password: ")

    if not is_valid_email(email):
        print("Please enter a valid email address.")
        return False
    if not is_strong_password(password):
        print(f"Invalid password format. {PASSWORD_REQUIREMENTS}")
        return False

    outcome = backend.login(email, password)
    if outcome.ok and outcome.user is not None:
        print(f"Login successful. Hello, {outcome.user.first_name}!")
        return True

    if outcome.kind is OutcomeKind.USER_NOT_FOUND:
        if _confirm("You are not registered. Would you like to sign up? [y/N]: "):
            _sign_up(backend)
    elif outcome.kind is OutcomeKind.WRONG_PASSWORD:
        if _confirm("Wrong password. Would you like to reset it? [y/N]: "):
            _forgot_password(backend)
    elif outcome.kind is OutcomeKind.SESSION_ACTIVE:
        print("Another account is already signed in. Log out first.")
    return False


def _forgot_password(backend) -> bool:
    print("\nReset your password.")
    email = input("Email address: ").strip()
    new_password = getpass("New password: ")
    confirm_password = getpass("Confirm new password: ")

    if missing_fields(email=email, new_password=new_password, confirm_password=confirm_password):
        print("Please fill in all fields.")
        return False
    if not is_valid_email(email):
        print("Please enter a valid email address.")
        return False
    if not is_strong_password(new_password):
        print(f"Your new password does not meet the required format. {PASSWORD_REQUIREMENTS}")
        return False
    if new_password != confirm_password:
        print("New passwords do not match.")
        return False

    outcome = backend.reset_password(email, new_password)
    if outcome.kind is OutcomeKind.NOT_FOUND:
        print("No account was found for that email address.")
        return False

    print("Your password has been reset. You can now log in with your new password.")
    return True


def _confirm(prompt: str) -> bool:
    return input(prompt).strip().lower() in {"y", "yes"}


__all__ = ["run_console"]
