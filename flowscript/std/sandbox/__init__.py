from .python_sandbox import PythonSandbox, FlowScriptInterface, wrap_code

__all__ = [
    'PythonSandbox',
    'FlowScriptInterface',
    'wrap_code',
]
