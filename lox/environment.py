"""
Simplest possible environment concept.

This is the canonical list-structured search: a dictionary per scope and a
link to the enclosing scope. Closures hold on to the environment they were
born in, so several closures (and the scope itself) may share one, and
everybody sees everybody else's assignments.
"""
from typing import Any, Optional
from .ontology import Token
from .diagnostics import LoxRuntimeError

class Environment:
	_bindings : dict[str, Any]
	enclosing : Optional["Environment"]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self._bindings = {}
		self.enclosing = enclosing

	def child(self) -> "Environment":
		return Environment(self)

	def define(self, name:str, value:Any):
		""" Bind in this very scope. A second definition simply replaces the first. """
		self._bindings[name] = value

	def get(self, name:Token) -> Any:
		env = self._holder(name)
		return env._bindings[name.lexeme]

	def assign(self, name:Token, value:Any):
		""" Overwrite the innermost existing binding; never creates one. """
		env = self._holder(name)
		env._bindings[name.lexeme] = value

	def fetch(self, key:str) -> Any:
		""" For names the run-time itself planted, like `this` and `super`. """
		env = self
		while key not in env._bindings:
			env = env.enclosing
		return env._bindings[key]

	def _holder(self, name:Token) -> "Environment":
		env = self
		while env is not None:
			if name.lexeme in env._bindings: return env
			env = env.enclosing
		raise LoxRuntimeError(name, "Undefined variable '%s'." % name.lexeme)
