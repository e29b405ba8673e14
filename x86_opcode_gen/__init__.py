from .compare import compare_lines
from .families import generate_opcodes
