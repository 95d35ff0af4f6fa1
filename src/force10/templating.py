"""Kida template integration.

Exposes the preload tags to layouts as a global::

    env = Environment(loader=FileSystemLoader("templates"))
    register_globals(env, PreloadTagGenerator(config))

    {# templates/app.html #}
    <head>
        {{ force10_preload() }}
    </head>
"""

from kida import Environment
from kida.template import Markup

from force10.preload import PreloadTagGenerator

PRELOAD_GLOBAL = "force10_preload"


def preload_global(generator: PreloadTagGenerator):
    """Return a template callable rendering the tags as safe markup."""

    def force10_preload() -> Markup:
        return Markup(generator.generate())

    return force10_preload


def register_globals(env: Environment, generator: PreloadTagGenerator) -> Environment:
    """Bind force10's template globals onto *env*."""
    env.add_global(PRELOAD_GLOBAL, preload_global(generator))
    return env
