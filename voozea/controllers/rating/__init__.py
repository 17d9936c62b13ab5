from flask import Blueprint

rating_bp = Blueprint('rating_bp', __name__)


from .rating import *
from .feed import *
