from flask import Blueprint

entity_bp = Blueprint('entity_bp', __name__)


from .entity import *
from .follow import *
