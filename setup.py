"""
Setuptools build script for render_test_sim, the offline test-isolation engine for
rendering-dependent test suites.

Package metadata is read without importing the package: the version comes from
``config/constants.yaml`` (the same file ``render_test_sim.core.constants`` loads at
runtime) and the dependency lists come from the requirements files at the repository
root, so an install never needs numpy or pydantic to be importable beforehand.
"""

import pathlib
import re

import setuptools

HERE = pathlib.Path(__file__).parent
CONSTANTS_CONFIG_PATH = HERE / 'config' / 'constants.yaml'
README_PATH = HERE / 'README.md'
REQUIREMENTS_PATH = HERE / 'requirements.txt'
DEV_REQUIREMENTS_PATH = HERE / 'requirements-dev.txt'

PACKAGE_NAME = 'render-test-sim'
AUTHOR = 'render_test_sim Development Team'
AUTHOR_EMAIL = 'render-test-sim@example.com'
DESCRIPTION = (
    'Offline test isolation for rendering-dependent test suites: seeded scene data, '
    'a simulated WebGL context and a simulated browser driver'
)
LICENSE = 'MIT'
URL = 'https://github.com/render-test-sim/render_test_sim'
FALLBACK_VERSION = '0.0.1'

KEYWORDS = [
    'testing', 'test isolation', 'webgl', 'simulation', 'fixtures',
    'browser automation', 'synthetic data', 'three.js'
]

CLASSIFIERS = [
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Developers',
    'Topic :: Software Development :: Testing',
    'Topic :: Software Development :: Testing :: Mocking',
    'License :: OSI Approved :: MIT License',
    'Operating System :: POSIX :: Linux',
    'Operating System :: MacOS',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.10',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
    'Programming Language :: Python :: 3.13',
    'Framework :: Pytest'
]

# "version:" inside the top-level "package:" block of constants.yaml
_VERSION_PATTERN = re.compile(r'^package:[ \t]*\n(?:[ \t]+.*\n)*?[ \t]+version:\s*["\']?([\w.+-]+)', re.MULTILINE)


def read_requirements(requirements_file: pathlib.Path) -> list:
    """
    Parse a requirements file into setuptools requirement strings.

    Blank lines, comment lines and inline comments are dropped; a missing file yields
    an empty list so the caller can fall back to a built-in dependency set.
    """
    if not requirements_file.exists():
        return []

    requirements = []
    for line in requirements_file.read_text(encoding='utf-8').splitlines():
        line = line.split('#', 1)[0].strip()
        if line:
            requirements.append(line)
    return requirements


def read_long_description() -> str:
    if README_PATH.exists():
        return README_PATH.read_text(encoding='utf-8')
    return DESCRIPTION


def get_version_from_config() -> str:
    """
    Extract the package version from config/constants.yaml with a regular expression.

    Returns:
        str: Version string such as ``"0.1.0"``, or the fallback version when the file
        is missing or has no ``package.version`` entry.
    """
    if not CONSTANTS_CONFIG_PATH.exists():
        print(f"Warning: {CONSTANTS_CONFIG_PATH} not found, using version {FALLBACK_VERSION}")
        return FALLBACK_VERSION

    match = _VERSION_PATTERN.search(CONSTANTS_CONFIG_PATH.read_text(encoding='utf-8'))
    if match is None:
        print(f"Warning: no package version in {CONSTANTS_CONFIG_PATH}, using {FALLBACK_VERSION}")
        return FALLBACK_VERSION
    return match.group(1)


def setup_package():
    """Configure and run setuptools.setup() for render_test_sim."""
    version = get_version_from_config()
    print(f"Setting up {PACKAGE_NAME} version {version}")

    install_requires = read_requirements(REQUIREMENTS_PATH)
    if not install_requires:
        install_requires = [
            'numpy>=1.24.0',
            'PyYAML>=6.0',
            'pydantic>=2.0',
            'loguru>=0.7.0',
            'typing_extensions>=4.5.0',
            'psutil>=5.9.0'
        ]

    dev_requirements = read_requirements(DEV_REQUIREMENTS_PATH)
    if not dev_requirements:
        dev_requirements = [
            'pytest>=8.0.0',
            'hypothesis>=6.0.0'
        ]

    setup_config = {
        'name': PACKAGE_NAME,
        'version': version,
        'description': DESCRIPTION,
        'long_description': read_long_description(),
        'long_description_content_type': 'text/markdown',
        'author': AUTHOR,
        'author_email': AUTHOR_EMAIL,
        'url': URL,
        'license': LICENSE,
        'keywords': KEYWORDS,
        'classifiers': CLASSIFIERS,

        'packages': setuptools.find_packages(include=['render_test_sim', 'render_test_sim.*']),

        'install_requires': install_requires,

        'extras_require': {
            'dev': dev_requirements,
            'test': [
                'pytest>=8.0.0',
                'hypothesis>=6.0.0'
            ]
        },

        'python_requires': '>=3.10',
        'zip_safe': False,
        'include_package_data': True
    }

    setuptools.setup(**setup_config)


if __name__ == '__main__':
    setup_package()
