"""DeleteUser: remove an account together with everything it owns."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from academy.cascade import cascade_user_deletion
from academy.domain import academy
from academy.identity.user.user import User

logger = structlog.get_logger(__name__)


@academy.command(part_of="User")
class DeleteUser:
    user_id = Identifier(required=True)


@academy.command_handler(part_of=User)
class DeleteUserHandler:
    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        affected = cascade_user_deletion(user.id)
        repo._dao.delete(user)

        logger.info("User deleted", user_id=str(user.id), items_recomputed=len(affected))
