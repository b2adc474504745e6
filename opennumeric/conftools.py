"""
Validated configuration dictionaries

A :class:`CheckedDict` only accepts the keys present in its default dict and
checks every value against an optional validator. A :class:`ConfigDict`
adds a name, user overrides read from a json file in the user's config dir
and a tabulated repr.

Example::

    default = {'primes.crossover': 380000, 'parallel.backend': 'thread'}
    validator = {'parallel.backend::choices': ['thread', 'process'],
                 'primes.crossover::range': (0, 2**64)}
    config = ConfigDict('mylib:config', default, validator)
    config['parallel.backend'] = 'fork'  # --> ValueError
"""
from __future__ import annotations
import json
import logging
import os
import re
import textwrap
from types import FunctionType as _FunctionType
import typing as t

import appdirs
import tabulate


logger = logging.getLogger("opennumeric.conftools")


_validatorSuffixes = ('type', 'choices', 'range')


def _checkValidator(validatordict: dict, defaultdict: dict) -> dict:
    """
    Checks the validity of the validator itself and returns a postprocessed copy

    Args:
        validatordict: the validator dict
        defaultdict: the dict containing defaults

    Returns:
        a postprocessed validator dict, where static choices are converted to sets
    """
    v = {}
    for key, value in validatordict.items():
        basekey, _, suffix = key.partition("::")
        if basekey not in defaultdict:
            raise KeyError(f"The validator has a key not present in the default: {basekey}")
        if suffix not in _validatorSuffixes:
            raise KeyError(f"Invalid validator key {key}, suffix should be one of "
                           f"{_validatorSuffixes}")
        if suffix == 'choices' and isinstance(value, (list, tuple)):
            value = set(value)
        v[key] = value
    return v


def _isfloaty(value) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) or hasattr(value, '__float__')


class CheckedDict(dict):

    def __init__(self, default: dict, validator: dict = None, help: dict = None,
                 callback=None) -> None:
        """
        A dictionary which checks that the keys and values are valid
        according to a default dict and a validator.

        Args:
            default: a dict with all default values. Only keys
                present in the default are accepted
            validator: a dict containing choices, types and ranges for the
                keys in the default. Given a default like
                ``{'keyA': 'foo', 'keyB': 20}``, a validator could be
                ``{'keyA::choices': ['foo', 'bar'], 'keyB::range': (0, 100)}``.
                Choices can be given lazily as a function returning a list
            help: a dict mapping keys to a help string
            callback: a function ``(key, value) -> None``, called after a
                key has been modified
        """
        super().__init__()
        self.default = default
        self._allowedkeys = set(default.keys())
        self._validator = _checkValidator(validator, default) if validator else {}
        self._callback = callback
        self._help = help or {}
        super().update(default)

    def diff(self) -> dict:
        """
        Get a dict containing keys:values which differ from default
        """
        return {key: value for key, value in self.items()
                if value != self.default[key]}

    def __setitem__(self, key: str, value) -> None:
        if key not in self._allowedkeys:
            raise KeyError(f"Unknown key: {key}")
        errormsg = self.checkValue(key, value)
        if errormsg:
            raise ValueError(errormsg)
        super().__setitem__(key, value)
        if self._callback is not None:
            self._callback(key, value)

    def checkDict(self, d: dict) -> str:
        """
        Check all keys and values in d, returns an error message or "" if valid
        """
        invalidkeys = [key for key in d if key not in self._allowedkeys]
        if invalidkeys:
            return f"Some keys are not valid: {invalidkeys}"
        for k, v in d.items():
            errormsg = self.checkValue(k, v)
            if errormsg:
                return errormsg
        return ""

    def getChoices(self, key: str) -> t.Optional[set]:
        """
        Return a seq. of possible values for key or None
        """
        if key not in self._allowedkeys:
            raise KeyError(f"{key} is not a valid key")
        key2 = key + "::choices"
        choices = self._validator.get(key2)
        if isinstance(choices, _FunctionType):
            choices = set(choices())
            self._validator[key2] = choices
        return choices

    def getHelp(self, key: str) -> t.Optional[str]:
        return self._help.get(key)

    def getRange(self, key: str) -> t.Optional[tuple]:
        if key not in self._allowedkeys:
            raise KeyError(f"{key} is not a valid key")
        return self._validator.get(key + "::range")

    def getType(self, key: str) -> t.Union[type, tuple]:
        """
        Returns the expected type for key

        If not explicitely given by the validator, the type is derived from
        the choices or the default value. An int default accepts only ints,
        a float default accepts any number
        """
        definedtype = self._validator.get(key + "::type")
        if definedtype:
            return definedtype
        choices = self.getChoices(key)
        if choices:
            return tuple(set(type(choice) for choice in choices))
        defaultvalue = self.default[key]
        if isinstance(defaultvalue, (bytes, str)):
            return str
        return type(defaultvalue)

    def getTypestr(self, key: str) -> str:
        t = self.getType(key)
        if isinstance(t, tuple):
            return "(" + ", ".join(x.__name__ for x in t) + ")"
        return t.__name__

    def checkValue(self, key: str, value) -> t.Optional[str]:
        """
        Check if value is valid for key

        Returns:
            an error message, or None if the value is valid
        """
        choices = self.getChoices(key)
        if choices is not None and value not in choices:
            return f"{key} should be one of {sorted(choices, key=str)}, got {value!r}"
        t = self.getType(key)
        if t is float:
            if not _isfloaty(value):
                return f"Expected floatlike for key {key}, got {type(value).__name__}"
        elif t is int and isinstance(value, bool):
            return f"Expected int for key {key}, got bool"
        elif not isinstance(value, t):
            return f"Expected {self.getTypestr(key)} for key {key}, got {type(value).__name__}"
        r = self.getRange(key)
        if r and not (r[0] <= value <= r[1]):
            return f"{key} should be within range {r}, got {value}"
        return None

    def reset(self) -> None:
        """
        Resets the config to its default (inplace)
        """
        super().clear()
        super().update(self.default)

    def update(self, d: dict = None, **kws) -> None:
        d = {**(d or {}), **kws}
        errormsg = self.checkDict(d)
        if errormsg:
            raise ValueError(f"dict is invalid: {errormsg}")
        for key, value in d.items():
            self[key] = value


class ConfigDict(CheckedDict):

    def __init__(self, name: str, default: dict, validator: dict = None,
                 help: dict = None, load=True) -> None:
        """
        A named configuration

        Args:
            name: a str of the form ``folder:config``. Saved overrides
                live at ``$USERCONFIGDIR/folder/config.json``
            default: a dict with all default values
            validator: see :class:`CheckedDict`
            help: a dict mapping keys to a help string
            load: if True, read saved overrides, if any
        """
        if not _isValidName(name):
            raise ValueError(f"{name} is not a valid name for a config. It should contain"
                             " letters, numbers and any of '.', '_', ':'")
        super().__init__(default=default, validator=validator, help=help,
                         callback=self._mycallback)
        self.name = name
        self._callbackreg: list[tuple[str, t.Callable]] = []
        self._helpwidth = 58
        if load:
            self.load()

    def _mycallback(self, key, value):
        for pattern, func in self._callbackreg:
            if re.match(pattern, key):
                func(self, key, value)

    def registerCallback(self, func, pattern: str = None) -> None:
        """
        Register a callback to be fired when a key matching the given pattern is
        changed. If no pattern is given, the function is called for every key.

        Args:
            func: a function of the form ``(config, key, value) -> None``
            pattern: a regex to match against the modified key
        """
        self._callbackreg.append((pattern or r".*", func))

    def getPath(self) -> str:
        """ The path of the json file holding the saved overrides """
        return getPath(self.name)

    def load(self) -> dict:
        """
        Read the saved overrides, if present, and update self

        Keys not present in the default are ignored. An invalid file
        raises ValueError

        Returns:
            the overrides read
        """
        path = self.getPath()
        if not os.path.exists(path):
            logger.debug(f"No saved config at {path}, using default")
            return {}
        logger.debug(f"Reading config from disk: {path}")
        with open(path) as f:
            try:
                saved = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Could not read config {path}: {e}") from e
        unknown = saved.keys() - self._allowedkeys
        if unknown:
            logger.debug(f"Ignoring unknown keys in saved config: {sorted(unknown)}")
        overrides = {k: v for k, v in saved.items() if k in self._allowedkeys}
        self.update(overrides)
        return overrides

    def save(self) -> str:
        """
        Save the keys which differ from the default

        Returns:
            the path of the saved file
        """
        path = self.getPath()
        folder = os.path.dirname(path)
        os.makedirs(folder, exist_ok=True)
        logger.debug(f"Saving config to {path}")
        with open(path, "w") as f:
            json.dump(self.diff(), f, indent=True, sort_keys=True)
        return path

    def __repr__(self) -> str:
        header = f"Config: {self.name}\n"
        rows = []
        for k in sorted(self.keys()):
            info = []
            lines = []
            choices = self.getChoices(k)
            if choices:
                choicestr = ", ".join(sorted(str(ch) for ch in choices))
                if len(choicestr) > self._helpwidth:
                    lines.extend(textwrap.wrap(choicestr, self._helpwidth))
                else:
                    info.append(choicestr)
            keyrange = self.getRange(k)
            if keyrange:
                info.append(f"between {keyrange}")
            info.append(self.getTypestr(k))
            rows.append((k, str(self[k]), " ".join(info)))
            doc = self.getHelp(k)
            if doc:
                lines.extend(textwrap.wrap(doc, self._helpwidth))
            for line in lines:
                rows.append(("", "", line))
        return header + tabulate.tabulate(rows)


def _isValidName(name: str) -> bool:
    return re.fullmatch(r"[a-zA-Z0-9\.\:_]+", name) is not None


def _parseName(name: str) -> tuple[t.Optional[str], str]:
    """
    Returns (base, configname). base can be None
    """
    if ":" not in name:
        return None, name
    base, configname = name.split(":")
    return (base or None), configname


def getPath(name: str) -> str:
    """
    The path of the json file for a config with the given name
    """
    userconfigdir = appdirs.user_config_dir()
    base, configname = _parseName(name)
    configdir = os.path.join(userconfigdir, base) if base else userconfigdir
    return os.path.join(configdir, configname + ".json")
