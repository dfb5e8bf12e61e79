import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .constants import DEFAULT_IMAGE, DEFAULT_MOUNT, DEFAULT_TOOL, CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH
from .coms.containers import CONTAINER_RUNTIME
from .logging import Log

class ConfigError(Exception):
    pass

@dataclass
class LauncherConfig:
    image: str = DEFAULT_IMAGE
    runtime: CONTAINER_RUNTIME = CONTAINER_RUNTIME.DOCKER
    mount: Path = DEFAULT_MOUNT
    tool: str = DEFAULT_TOOL
    sudo: bool = True

    @classmethod
    def Parse(cls, d: dict|None):
        if d is None: return cls()
        if not isinstance(d, dict):
            raise ConfigError(f"config must be a mapping, got [{type(d).__name__}]")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if len(unknown) > 0:
            raise ConfigError(f"unknown config keys {unknown}")

        kwargs = dict(d)
        if "runtime" in kwargs:
            try:
                kwargs["runtime"] = CONTAINER_RUNTIME(str(kwargs["runtime"]).lower())
            except ValueError:
                options = [r.value for r in CONTAINER_RUNTIME]
                raise ConfigError(f"runtime must be one of {options}, got [{kwargs['runtime']}]")
        if "mount" in kwargs:
            mount = Path(str(kwargs["mount"]))
            if not mount.is_absolute():
                raise ConfigError(f"mount must be an absolute path, got [{mount}]")
            kwargs["mount"] = mount
        if "sudo" in kwargs and not isinstance(kwargs["sudo"], bool):
            raise ConfigError(f"sudo must be true or false, got [{kwargs['sudo']}]")
        for k in ["image", "tool"]:
            if k in kwargs and (not isinstance(kwargs[k], str) or kwargs[k].strip() == ""):
                raise ConfigError(f"{k} must be a non-empty string")
        return cls(**kwargs)

    @classmethod
    def Load(cls, path: Path):
        path = Path(path).expanduser()
        try:
            with open(path) as f:
                d = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"could not read config [{path}]: {e}")
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid yaml in config [{path}]: {e}")
        Log.Debug(f"loaded config from [{path}]")
        return cls.Parse(d)

    @classmethod
    def Resolve(cls, path: Path|None = None):
        """
        explicit path > $PSORTM_CONFIG > ~/.config/psortm_app/config.yml > defaults
        an explicitly requested file must exist, the default location is optional
        """
        if path is not None:
            return cls.Load(path)
        from_env = os.environ.get(CONFIG_ENV_VAR)
        if from_env:
            return cls.Load(Path(from_env))
        default = DEFAULT_CONFIG_PATH.expanduser()
        if default.is_file():
            return cls.Load(default)
        return cls()
