import os
import subprocess
from threading import Thread
from typing import IO, Callable

class ShellProcess:
    """
    Runs a command string in bash and hands each complete line of its
    stdout/stderr to the registered callbacks. Lines are read on one
    daemon thread per stream; Wait() joins both before returning the
    exit code, so no output is lost after the process ends.
    """

    def __init__(self, cmd: str, env: dict[str, str]|None = None) -> None:
        self.ENCODING = "utf-8"
        self._cmd = cmd
        self._env = env
        self._console: subprocess.Popen|None = None
        self._workers: list[Thread] = []
        self._on_out_callbacks: list[Callable[[str], None]] = []
        self._on_err_callbacks: list[Callable[[str], None]] = []

    def RegisterOnOut(self, callback: Callable[[str], None]):
        self._on_out_callbacks.append(callback)

    def RegisterOnErr(self, callback: Callable[[str], None]):
        self._on_err_callbacks.append(callback)

    def Decode(self, payload: bytes):
        return payload.decode(encoding=self.ENCODING, errors="replace")

    def Start(self):
        assert self._console is None, "process already started"
        env = None
        if self._env is not None:
            env = dict(os.environ)
            env.update(self._env)
        self._console = subprocess.Popen(
            ["bash", "-c", self._cmd],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            close_fds=True,
        )

        def reader(io: IO[bytes], callbacks):
            for line in iter(io.readline, b""):
                msg = self._remove_trailing_newline(self.Decode(line))
                for cb in callbacks: cb(msg)
            io.close()

        self._workers = [
            Thread(target=reader, args=[self._console.stdout, self._on_out_callbacks]),
            Thread(target=reader, args=[self._console.stderr, self._on_err_callbacks]),
        ]
        for w in self._workers:
            w.daemon = True # stop with program
            w.start()
        return self

    def Wait(self) -> int:
        assert self._console is not None, "process not started"
        code = self._console.wait()
        for w in self._workers:
            w.join()
        return code

    def __enter__(self):
        return self.Start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._console is not None and self._console.poll() is None:
            self._console.terminate()
            self._console.wait()
        for w in self._workers:
            w.join()

    def _remove_trailing_newline(self, s):
        while len(s) > 0 and s[-1] in {"\n", "\r"}:
            s = s[:-1]
        return s
