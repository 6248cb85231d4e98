"""CLI utility functions for user interaction."""
import sys

from agents.models import AgentResult


def read_user_goal(prompt: str = "🤖 Enter your request: ") -> str:
    """Read a request from user input via stdin."""
    print(prompt, end="", flush=True)
    line = sys.stdin.readline()
    if not line:  # EOF
        raise KeyboardInterrupt

    goal = line.strip()
    if goal.lower() in {"bye", "quit", "exit", "q"}:
        raise KeyboardInterrupt

    return goal


def print_result(result: AgentResult) -> None:
    """Print the agent's answer to stdout."""
    if result.success:
        print(f"✅ **Answer:** {result.final_answer}")

        if result.tool_calls:
            print(f"\n📋 **Used {len(result.tool_calls)} tool(s) in {result.iterations} step(s):**")
            for i, call in enumerate(result.tool_calls, 1):
                print(f"  {i}. {call.get('tool_name', 'Unknown')}")
    else:
        print(f"❌ **Failed:** {result.final_answer}")
        if result.error_message:
            print(f"   Error: {result.error_message}")
