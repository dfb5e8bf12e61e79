import shlex
from dataclasses import dataclass, field
from pathlib import Path
from enum import Enum

from ..logging import Log
from ..process_management import ShellProcess

class CONTAINER_RUNTIME(Enum):
    DOCKER = "docker"
    APPTAINER = "apptainer"

@dataclass
class Container:
    image: str
    entrypoint: str|None = None
    binds: list[tuple[Path, Path]] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    runtime: CONTAINER_RUNTIME = CONTAINER_RUNTIME.DOCKER
    sudo: bool = False

    def _get_image_uri(self):
        if self.runtime == CONTAINER_RUNTIME.APPTAINER and "://" not in self.image:
            return f"docker://{self.image}"
        return self.image

    def MakeRunCommand(self, args: list[str]|None = None):
        """
        With an entrypoint, the image's own ENTRYPOINT is bypassed: docker
        gets --entrypoint and apptainer uses exec instead of run.
        """
        # later binds to the same target replace earlier ones
        binds = {str(d):str(s) for s, d in self.binds}
        binds = [(s, d) for d, s in binds.items()]
        q = shlex.quote
        args = [q(str(x)) for x in (args or [])]
        if self.runtime == CONTAINER_RUNTIME.DOCKER:
            # --init so the tool is not pid 1 and stops on the signals docker proxies
            action = ["run", "--rm", "--init"]
            if self.entrypoint is not None:
                action.append(f"--entrypoint {q(self.entrypoint)}")
            binds = [f"--mount {q(f'type=bind,source={src},target={dst}')}" for src, dst in binds]
            env = [f"-e {q(f'{k}={v}')}" for k, v in self.env.items()]
            target = [q(self._get_image_uri()), *args]
        elif self.runtime == CONTAINER_RUNTIME.APPTAINER:
            action = ["run" if self.entrypoint is None else "exec", "--no-home"]
            binds = [f"--bind {q(','.join(f'{src}:{dst}' for src, dst in binds))}"] if len(binds) > 0 else []
            env = [f"--env {q(f'{k}={v}')}" for k, v in self.env.items()]
            target = [q(self._get_image_uri())]
            if self.entrypoint is not None:
                target.append(q(self.entrypoint))
            target += args
        else:
            raise ValueError(f"unknown container runtime [{self.runtime}]")

        toks = [
            "sudo" if self.sudo else "",
            self.runtime.value,
            *action,
            *binds,
            *env,
            *target,
        ]
        return " ".join(x for x in toks if x != "")

    def Run(self, args: list[str]|None = None) -> int:
        cmd = self.MakeRunCommand(args)
        Log.Info(f"running [{cmd}]")
        # exec so that terminating the shell signals sudo/the runtime directly
        shell = ShellProcess(f"exec {cmd}")
        shell.RegisterOnOut(Log.Info)
        shell.RegisterOnErr(Log.Warn)
        with shell:
            return shell.Wait()
