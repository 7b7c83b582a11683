# Discovers and manages all available tools automatically.
# Version 1.2.0: Tools are looked up by the function name the assistant calls.

import pkgutil
import inspect
from typing import Dict, List, Any, Optional
from app import tools as tools_package
from app.tools.base_tool import BaseTool
from app.utils.logger import console

class ToolRegistry:
    """
    A class to automatically discover, register, and manage tools.
    """
    def __init__(self):
        self.tools: Dict[str, BaseTool] = {}
        self._discover_tools()
        console.success(f"Tool discovery complete. Found {len(self.tools)} tools: {list(self.tools.keys())}")

    def _discover_tools(self):
        """
        Scans the app.tools package, imports all modules, finds classes that
        inherit from BaseTool, and creates an instance of each to register.
        """
        for _, modname, _ in pkgutil.iter_modules(tools_package.__path__, f"{tools_package.__name__}."):
            try:
                if not modname.startswith(f"{tools_package.__name__}.base_tool"):
                    module = __import__(modname, fromlist="dummy")
                    for name, obj in inspect.getmembers(module):
                        if inspect.isclass(obj) and issubclass(obj, BaseTool) and obj is not BaseTool:
                            instance = obj()
                            self.tools[instance.name] = instance
                            console.info(f"Successfully registered tool: '{instance.name}'")
            except Exception as e:
                console.error(f"Failed to load or register tool from module {modname}: {e}")

    def get(self, tool_name: str) -> Optional[BaseTool]:
        """Returns the tool registered under `tool_name`, or None."""
        return self.tools.get(tool_name)

    def get_definitions(self) -> List[Dict[str, Any]]:
        """Returns the list of all tool definitions in function-calling format."""
        if not self.tools:
            return []
        return [tool.get_definition() for tool in self.tools.values()]

# Create a singleton instance for global use throughout the application.
tool_registry = ToolRegistry()
