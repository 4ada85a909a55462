# conftest -- common fixtures for the MIDI tools tests
#
# author: MidiTools contributors, 2024

import pytest

from basemodules.simplelogging import Logging

from adjustermodules.miditools_configuration import MidiToolsConfiguration

#====================

@pytest.fixture(autouse=True)
def resetLogging ():
    """Starts each test with buffered logging without a logging file"""

    Logging.initialize()
    yield
    Logging.initialize()

#--------------------

@pytest.fixture
def configuration ():
    """The default configuration"""

    return MidiToolsConfiguration()

#--------------------

@pytest.fixture
def verboseConfiguration ():
    """The default configuration with verbose console output"""

    return MidiToolsConfiguration(verboseLoggingIsActive=True)
