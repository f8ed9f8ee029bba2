"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Numbers, strings, booleans and nil play themselves as Python
float, str, bool and None. Special things like closures, classes
and instances need more help, and they all descend from LoxValue.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Union, NamedTuple
from ..environment import Environment

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """
	@abstractmethod
	def __str__(self): pass

NATIVE_DATA = Union[float, str, bool, None]
VALUE = Union[NATIVE_DATA, LoxValue]
ARGS = Sequence[VALUE]
ENV = Environment

class Returning(NamedTuple):
	"""
	What executing a `return` statement produces. Blocks and loops pass it
	straight up; the nearest function call consumes it. Statements that
	complete normally produce None instead.
	"""
	value: VALUE
