from .base import Base

from .user import User, UserRole
from .category import Category
from .breed import Breed
from .animal import Animal, AgeGroup, Gender, Size
from .adoption_request import AdoptionRequest, RequestStatus
