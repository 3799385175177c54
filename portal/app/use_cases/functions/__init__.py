"""
Function Invocation Use Cases
"""

from .invoke_function_use_case import FunctionResponse, InvokeFunctionUseCase

__all__ = ["InvokeFunctionUseCase", "FunctionResponse"]
