#!/usr/bin/env python3
"""Send a one-shot chat completion from the command line.

Credentials come from the environment (or a .env file), see chatgate.config.

Usage:
    # Direct API
    python scripts/chat_demo.py --model gpt-4 "Tell me a very long joke"

    # Gateway deployment with an api-key
    python scripts/chat_demo.py --api-type azure --model gpt-4-8k "Tell me a joke"

    # Print the raw response body instead of the first choice
    python scripts/chat_demo.py --raw --model gpt-4 "Hello"
"""

import argparse
import asyncio
import logging
import sys

from chatgate import ApiType, ChatCompletion, ChatMessageBuilder, Client, LLMError
from chatgate.config import azure_api_version

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def run(args: argparse.Namespace) -> int:
    api_type = ApiType(args.api_type)
    api_version = args.api_version or (azure_api_version() if api_type.is_gateway else None)

    messages = (
        ChatMessageBuilder()
        .system(args.system)
        .user(args.prompt)
        .build()
    )
    request = (
        ChatCompletion()
        .set_messages(messages)
        .set_temperature(args.temperature)
        .set_stream(False)
    )
    if args.max_tokens:
        request.set_max_tokens(args.max_tokens)

    async with Client.from_env(api_type) as client:
        if args.raw:
            print(await request.create_raw(client, args.model, api_version))
            return 0

        response = await request.create(client, args.model, api_version)

    print(response.content or "")
    if response.usage:
        logger.info(
            "Tokens: prompt=%d completion=%d total=%d",
            response.usage.prompt_tokens,
            response.usage.completion_tokens,
            response.usage.total_tokens,
        )
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Send a chat completion request",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("prompt", help="User message")
    parser.add_argument("--model", required=True, help="Model name or deployment id")
    parser.add_argument(
        "--api-type",
        choices=[t.value for t in ApiType],
        default=ApiType.OPENAI.value,
        help="Provider contract (default: openai)",
    )
    parser.add_argument("--api-version", help="Gateway API version")
    parser.add_argument("--system", default="You are a helpful assistant.", help="System prompt")
    parser.add_argument("--temperature", type=float, default=0.8)
    parser.add_argument("--max-tokens", type=int, default=None)
    parser.add_argument("--raw", action="store_true", help="Print the raw response body")
    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args)))
    except LLMError as e:
        logger.error("Request failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
