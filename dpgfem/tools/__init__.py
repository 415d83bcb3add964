
from .get_component import GetComponent
