#! /usr/bin/env python3

import os
import sys
import subprocess

REPO_ROOT = os.path.dirname(os.path.realpath(__file__))
TESTS_DIR = os.path.join(REPO_ROOT, 'tests')


def main():
    # Unset any ASPECTSYNC environment variables to make sure test runs don't
    # get thrown off by anything in your bashrc.
    env = {var: val for var, val in os.environ.items()
           if not var.startswith('ASPECTSYNC_')}
    env['PYTHONPATH'] = REPO_ROOT

    args = sys.argv[1:]
    if len(args) > 0 and args[0] == '--with-coverage':
        args.pop(0)
        command_start = ['coverage', 'run']
    else:
        command_start = [sys.executable]
    command = command_start + ['-m', 'unittest'] + args
    try:
        subprocess.check_call(command, env=env, cwd=TESTS_DIR)
    except subprocess.CalledProcessError:
        sys.exit(1)

    # Run the linter.
    try:
        subprocess.check_call(['flake8', 'aspectsync', 'tests', 'setup.py'],
                              cwd=REPO_ROOT)
    except subprocess.CalledProcessError:
        sys.exit(1)


if __name__ == '__main__':
    main()
