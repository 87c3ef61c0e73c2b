from .base import FactorBasedMethod
from .chainladder import ChainLadder
from .additive import AdditiveMethod
from .bornferg import BornhuetterFerguson
from .capecod import CapeCod
from .lossdev import LossDevelopment
