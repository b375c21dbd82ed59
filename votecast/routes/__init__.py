from votecast.routes.admin import register_admin_routes
from votecast.routes.auth import register_auth_routes
from votecast.routes.voter import register_voter_routes


def register_routes(app):
    register_auth_routes(app)
    register_voter_routes(app)
    register_admin_routes(app)
