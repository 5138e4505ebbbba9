from playbook.services.saga import Saga
from playbook.services.pickup_line import PickupLineService
from playbook.services.tag import TagService
from playbook.services.user import UserService, validate_username
from playbook.services.seeder import SeedFile, Seeder

__all__ = [
    "Saga",
    "PickupLineService",
    "TagService",
    "UserService",
    "validate_username",
    "SeedFile",
    "Seeder",
]
