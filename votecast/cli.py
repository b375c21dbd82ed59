import click

from votecast.extensions import db
from votecast.models import User, UserRole


def _find_user(email):
    user = User.query.filter_by(email=email.strip().lower()).first()
    if user is None:
        raise click.ClickException(f"No account found for {email}.")
    return user


def register_cli(app):
    @app.cli.command("grant-admin")
    @click.argument("email")
    def grant_admin(email):
        """Give the account registered under EMAIL the admin role."""
        user = _find_user(email)
        if user.is_admin:
            click.echo(f"{user.email} is already an admin.")
            return

        user.roles.append(UserRole(role="admin"))
        db.session.commit()
        app.logger.info("Admin role granted to user %s", user.id)
        click.echo(f"Granted admin to {user.email}.")

    @app.cli.command("revoke-admin")
    @click.argument("email")
    def revoke_admin(email):
        """Remove the admin role from the account registered under EMAIL."""
        user = _find_user(email)
        admin_roles = [role for role in user.roles if role.role == "admin"]
        if not admin_roles:
            click.echo(f"{user.email} is not an admin.")
            return

        for role in admin_roles:
            user.roles.remove(role)
        db.session.commit()
        app.logger.info("Admin role revoked from user %s", user.id)
        click.echo(f"Revoked admin from {user.email}.")
