
from .compiler import RunLengthCompiler
from .executor import Executor
from .lexer import filter_source
from .instructions import Program
from .errors import BFError, BFCompileError, BFRuntimeError, BFIOError
from .api import RunOptions, RunResult, compile_file, compile_string, run_file, run_program, run_string

__all__ = [
    'RunLengthCompiler',
    'Executor',
    'filter_source',
    'Program',
    'BFError',
    'BFCompileError',
    'BFRuntimeError',
    'BFIOError',
    'RunOptions',
    'RunResult',
    'compile_string',
    'compile_file',
    'run_program',
    'run_string',
    'run_file',
]
