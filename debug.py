# debug.py
from __future__ import annotations
import logging
from typing import Dict

_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Debug:
    """Per-component debug logging on the ``ENIGMA`` logger.

    Every module holds its own Debug() but the switches below are shared,
    so enabling a component from the CLI reaches all of them.
    """

    _root_configured: bool = False
    _enabled: bool = True
    _components: Dict[str, bool] = {
        "alphabet":    False,
        "permutation": False,
        "rotor":       False,
        "reflector":   False,
        "stepping":    False,
        "plugboard":   False,
        "encipher":    False,
        "config":      False,
    }

    def __init__(self, *, log_to: str | None = None) -> None:
        # the first instance sets up the root logger, later ones only add files
        if not Debug._root_configured:
            handlers: list[logging.Handler] = [logging.StreamHandler()]
            if log_to:
                handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

            logging.basicConfig(
                level=logging.DEBUG,
                format=_FORMAT,
                datefmt=_DATEFMT,
                handlers=handlers,
            )
            Debug._root_configured = True
        elif log_to:
            self.add_file(log_to)

        self.logger = logging.getLogger("ENIGMA")

    @staticmethod
    def add_file(path: str) -> None:
        """Tee every later message into *path* as well."""
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        logging.getLogger().addHandler(handler)

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def active(self, component: str) -> bool:
        return Debug._enabled and Debug._components.get(component, False)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def toggle(self, component: str) -> None:
        self._require(component)
        Debug._components[component] = not Debug._components[component]

    def toggle_global(self, state: bool) -> None:
        """Switch every component on/off at once."""
        Debug._enabled = state

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        active = [k for k, v in Debug._components.items() if v]
        return f"<Debug enabled={Debug._enabled} active={active}>"
