'''
mrzcrop::util: Generic utilities.
A minimal lazy-evaluation pipeline of named computation steps.

Author: mrzcrop contributors
License: MIT
'''
import logging
from collections import OrderedDict

logger = logging.getLogger(__name__)


class Pipeline(object):
    """
    A pipeline is a set of components, each of which is a callable that takes some named values
    (listed in its `__depends__`) and produces some other named values (listed in its `__provides__`).

    Values are computed lazily: asking for `pipeline['roi']` runs exactly the components needed to
    produce `roi`, each of them once. Computed values are kept in `self.data` for the lifetime of the
    pipeline object, so one pipeline corresponds to one run over one input.
    """

    def __init__(self):
        self.components = OrderedDict()
        self.depends = OrderedDict()
        self.provides = OrderedDict()
        self.whoprovides = OrderedDict()
        self.data = {}

    def add_component(self, name, callable, provides=None, depends=None):
        """
        Adds a component to the pipeline.

        :param name: the name of the component.
        :param callable: the callable to invoke.
        :param provides: list of names of values produced by the callable.
                         When None, the `__provides__` attribute of the callable is used.
        :param depends: list of names of values the callable expects as positional arguments.
                        When None, the `__depends__` attribute of the callable is used.
        """
        provides = provides if provides is not None else getattr(callable, '__provides__', [])
        depends = depends if depends is not None else getattr(callable, '__depends__', [])
        if name in self.components:
            raise Exception("There is already a component named %s" % name)
        for p in provides:
            if p in self.whoprovides:
                raise Exception("There is already a component that provides %s" % p)
        self.components[name] = callable
        self.depends[name] = list(depends)
        self.provides[name] = list(provides)
        for p in provides:
            self.whoprovides[p] = name

    def __contains__(self, key):
        return key in self.data or key in self.whoprovides

    def __getitem__(self, key):
        if key not in self.data:
            if key not in self.whoprovides:
                raise Exception("No component provides %s" % key)
            self._compute(self.whoprovides[key])
        return self.data[key]

    def _compute(self, name):
        """Runs component `name` (computing its dependencies first) and stores its results."""
        inputs = [self[d] for d in self.depends[name]]
        logger.debug("Running pipeline component %s", name)
        results = self.components[name](*inputs)
        provides = self.provides[name]
        if len(provides) == 1:
            self.data[provides[0]] = results
        else:
            for k, v in zip(provides, results):
                self.data[k] = v
