import os
import setuptools
import sys

# Written according to the docs at
# https://packaging.python.org/en/latest/distributing.html

project_root = os.path.dirname(__file__)
module_root = os.path.join(project_root, 'aspectsync')
version_file = os.path.join(module_root, 'VERSION')


def get_version():
    with open(version_file) as f:
        return f.read().strip()


def get_all_resources_filepaths():
    resources_paths = ['VERSION']
    resources_dir = os.path.join(module_root, 'resources')
    for dirpath, dirnames, filenames in os.walk(resources_dir):
        relpaths = [
            os.path.relpath(os.path.join(dirpath, f), start=module_root)
            for f in filenames
        ]
        resources_paths.extend(relpaths)
    return resources_paths


def get_install_requires():
    dependencies = ['docopt', 'PyYAML']
    if sys.version_info < (3, 6):
        raise RuntimeError('The minimum supported Python version is 3.6.')
    return dependencies


setuptools.setup(
    name='aspectsync',
    description='Copies aspect definitions into a build workspace',
    version=get_version(),
    license='Apache-2.0',
    packages=['aspectsync'],
    package_data={'aspectsync': get_all_resources_filepaths()},
    entry_points={'console_scripts': [
        'aspectsync=aspectsync.main:main',
    ]},
    install_requires=get_install_requires(),
)
