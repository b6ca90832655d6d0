"""
Send one message to the TMS assistant and print the reply.

Usage:
    python scripts/ask_assistant.py "Which vehicles are due for maintenance?" --user-id <uuid>
    python scripts/ask_assistant.py "Summarise today's jobs" --user-id <uuid> --model local --stream
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from tmsai.config import get_config
from tmsai.llm.errors import ProviderCallFailed, ProviderUnavailable, UnknownModelError
from tmsai.logging_config import setup_logging_from_config
from tmsai.service.ai_service import create_ai_service
from tmsai.service.errors import ContextError


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("message", help="Message to send to the assistant")
    parser.add_argument("--user-id", required=True, help="Profile id the context is built for")
    parser.add_argument(
        "--model",
        default=None,
        help="Model name (gpt4, claude, local). Uses routing.default_model if omitted.",
    )
    parser.add_argument("--stream", action="store_true", help="Print the reply as it arrives")
    args = parser.parse_args()

    config = get_config()
    setup_logging_from_config(config)
    service = create_ai_service(config)

    try:
        if args.stream:
            for chunk in service.chat_stream(args.message, args.user_id, args.model):
                print(chunk, end="", flush=True)
            print()
        else:
            print(service.chat(args.message, args.user_id, args.model))
    except ProviderUnavailable as e:
        print(f"Feature not available: {e}")
        return 2
    except UnknownModelError as e:
        print(e)
        print(f"Configured models: {', '.join(service.available_models()) or 'none'}")
        return 2
    except (ProviderCallFailed, ContextError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
