from .user.user import User
from .user.profile import UserProfile
from .trips.trip_model import Trip
from .trips.destination import Destination
from .trips.photo import Photo
