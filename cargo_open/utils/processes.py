import subprocess


def subprocess_run(args, **other_kwargs):
    """Run *args* in the foreground and wait for it to exit.

    The child shares this process's environment and terminal. A non-zero exit
    status is returned on the ``CompletedProcess``, never raised.
    """
    return subprocess.run(args, check=False, **other_kwargs)
