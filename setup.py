"""Setup File for MIDI Tools."""

from setuptools import setup
from os import path

here = path.abspath(path.dirname(__file__))

# version and source root directory for installation
installationVersion = "1.0"
sourceRootDirectory = "miditools/src"

with open(path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

#============================================================

setup(
    name = "MidiTools",
    version = installationVersion,
    description = "Transformations of Controller and Pitch Bend Events"
                  + " in MIDI Files",
    long_description = long_description,
    long_description_content_type = "text/markdown",
    author = "MidiTools contributors",
    license = "MIT",
    classifiers = [
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Multimedia :: Sound/Audio :: MIDI",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.7",
    ],
    keywords = "midi pitch bend controller vibrato reverb",
    package_dir = { "" : sourceRootDirectory },
    packages = ["basemodules", "adjustermodules"],
    install_requires = [],
    extras_require = { "test" : ["pytest>=7"] },
    python_requires = ">=3.7, <4",
    entry_points = { "console_scripts":
        [ "midiTools=adjustermodules.miditools:main" ]
    }
)
