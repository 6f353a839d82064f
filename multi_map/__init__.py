import logging

from multi_map.multi_map import MultiMap
from multi_map.persistence import dump, dumps, load, loads
from multi_map.utilities.array import group_by

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ['MultiMap', 'dump', 'dumps', 'group_by', 'load', 'loads']
