"""Setup script for Playlist Manager."""

from setuptools import setup, find_packages
from pathlib import Path

# Read requirements
requirements_path = Path(__file__).parent / 'requirements.txt'
with open(requirements_path, 'r', encoding='utf-8') as f:
    requirements = [
        line.strip() for line in f
        if line.strip() and not line.startswith('#')
    ]

# Read README
readme_path = Path(__file__).parent / 'README.md'
with open(readme_path, 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='playlist-manager',
    version='0.1.0',
    description='Command-line playlist manager built on a singly linked list',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Playlist Manager Contributors',
    python_requires='>=3.9',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'dev': [
            'pytest>=7.4.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'playlist-manager=playlist_manager.cli:app',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: End Users/Desktop',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Sound/Audio',
    ],
)
