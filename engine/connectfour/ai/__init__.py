"""AI components: negamax search, root parallelizer, and step controller."""

from .negamax import Negamax, SearchConfig, RefinementMode
from .parallel import search_root, partition
from .controller import make_step, StepResult
