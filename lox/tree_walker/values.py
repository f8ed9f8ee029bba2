"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.
"""
import math
from abc import abstractmethod
from typing import Any, Callable as PyCallable, Optional
from .. import syntax
from .types import LoxValue, ARGS, VALUE, ENV
from .evaluator import execute_block

###############################################################################

class Callable(LoxValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, args: ARGS) -> VALUE: pass

class LoxFunction(Callable):
	""" The run-time manifestation of a function declaration: a callable value tied to its natal environment. """
	# The same LoxFunction type serves for both functions and methods.
	# A method bound to an instance just has one more frame (holding `this`) in its closure.

	def __init__(self, declaration: syntax.FunctionDecl, closure: ENV, is_initializer: bool = False):
		self._declaration = declaration
		self._closure = closure
		self._is_initializer = is_initializer

	def __str__(self): return "<fn %s>" % self._declaration.name.lexeme

	def arity(self) -> int: return len(self._declaration.params)

	def bind(self, instance: "LoxInstance") -> "LoxFunction":
		frame = self._closure.child()
		frame.define("this", instance)
		return LoxFunction(self._declaration, frame, self._is_initializer)

	def call(self, args: ARGS) -> VALUE:
		frame = self._closure.child()
		for param, arg in zip(self._declaration.params, args):
			frame.define(param.lexeme, arg)
		signal = execute_block(self._declaration.body, frame)
		# An initializer always yields its instance, however it finishes.
		if self._is_initializer: return self._closure.fetch("this")
		return None if signal is None else signal.value

class NativeFunction(Callable):
	""" All parameters to native functions are plain values. Also a kind of value, like a closure. """
	def __init__(self, name: str, arity: int, fn: PyCallable[..., VALUE]):
		self.name = name
		self._arity = arity
		self._fn = fn

	def __str__(self): return "<native fn>"

	def arity(self) -> int: return self._arity

	def call(self, args: ARGS) -> VALUE:
		return self._fn(*args)

class LoxClass(Callable):
	""" Calling a class makes an instance. Methods are looked up through the superclass chain. """
	def __init__(self, name: str, superclass: Optional["LoxClass"], methods: dict[str, LoxFunction]):
		self.name = name
		self.superclass = superclass
		self.methods = methods

	def __str__(self): return self.name

	def find_method(self, name: str) -> Optional[LoxFunction]:
		klass = self
		while klass is not None:
			if name in klass.methods: return klass.methods[name]
			klass = klass.superclass
		return None

	def arity(self) -> int:
		initializer = self.find_method("init")
		return 0 if initializer is None else initializer.arity()

	def call(self, args: ARGS) -> "LoxInstance":
		instance = LoxInstance(self)
		initializer = self.find_method("init")
		if initializer is not None:
			initializer.bind(instance).call(args)
		return instance

class LoxInstance(LoxValue):
	def __init__(self, klass: LoxClass):
		self.klass = klass
		self.fields = {}

	def __str__(self): return "%s instance" % self.klass.name

###############################################################################

def is_truthy(value: VALUE) -> bool:
	""" Only nil and false are falsy. Zero and the empty string are true. """
	return not (value is None or value is False)

def is_equal(a: VALUE, b: VALUE) -> bool:
	"""
	Different variants are never equal, which matters in Python,
	where True == 1.0. Run-time objects compare by identity.
	"""
	return type(a) is type(b) and a == b

def _number_text(x: float) -> str:
	if math.isnan(x): return "NaN"
	if math.isinf(x): return "Infinity" if x > 0 else "-Infinity"
	text = repr(x)
	return text[:-2] if text.endswith(".0") else text

_TEXT : dict[type, PyCallable[[Any], str]] = {
	float: _number_text,
	str: str,
	bool: lambda b: "true" if b else "false",
	type(None): lambda _: "nil",
}

def stringify(value: VALUE) -> str:
	""" The text that `print` shows for a value. """
	try: fn = _TEXT[type(value)]
	except KeyError: fn = str  # LoxValue knows how to present itself.
	return fn(value)
