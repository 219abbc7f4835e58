"""RegisterUser: create a user account with a unique email."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from academy.domain import academy
from academy.errors import ConflictError
from academy.identity.user.user import User, UserRole
from academy.shared.query import fetch_one


@academy.command(part_of="User")
class RegisterUser:
    name = String(required=True, max_length=50)
    email = String(required=True, max_length=255)
    role = String(choices=UserRole, default=UserRole.USER.value)


@academy.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        email = command.email.strip().lower()
        if fetch_one(User, email=email) is not None:
            raise ConflictError({"email": ["A user with this email already exists"]})

        user = User.register(name=command.name, email=email, role=command.role)
        current_domain.repository_for(User).add(user)
        return str(user.id)
