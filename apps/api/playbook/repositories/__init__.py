from playbook.repositories.user import UserRepository
from playbook.repositories.tag import TagRepository
from playbook.repositories.pickup_line import PickupLineRepository

__all__ = ["UserRepository", "TagRepository", "PickupLineRepository"]
