# flake8: noqa

from .contract_information import *
