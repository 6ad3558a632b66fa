"""Account lifecycle: deactivate, reactivate and remove."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class DeactivateUser:
    user_id = Identifier(required=True)


@identity.command(part_of="User")
class ReactivateUser:
    user_id = Identifier(required=True)


@identity.command(part_of="User")
class RemoveUser:
    user_id = Identifier(required=True)


@identity.command_handler(part_of=User)
class AccountLifecycleHandler:
    @handle(DeactivateUser)
    def deactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deactivate()
        repo.add(user)

    @handle(ReactivateUser)
    def reactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.reactivate()
        repo.add(user)

    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove()
        repo.add(user)
