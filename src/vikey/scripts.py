import argparse
import logging
import pathlib
import sys

import trio

from .commontypes import InputMethod, VikeyError
from .device.keystreams import apply_composed, make_keystream
from .device.recorded_keyboard import Replayer
from .session import TypingSession
from .settings import Settings


def compose_text(text: str, input_method: InputMethod) -> str:
    session = TypingSession(input_method=input_method)
    return session.type_text(text)


type_parser = argparse.ArgumentParser(description="Type text through the Vietnamese composer and print the result.")
type_parser.add_argument("text", nargs="*", help="text to type; read from stdin when omitted")
type_config_group = type_parser.add_mutually_exclusive_group()
type_config_group.add_argument("--method", choices=[m.value for m in InputMethod])
type_config_group.add_argument("--settings", type=pathlib.Path)
type_parser.add_argument("-v", "--verbose", action="store_true")


def type_cli(argv=None):
    args = type_parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        if args.settings is not None:
            input_method = Settings.load(args.settings).input_method
        else:
            input_method = InputMethod(args.method or InputMethod.TELEX.value)
    except VikeyError as exc:
        print(exc, file=sys.stderr)
        return 1

    if args.text:
        print(compose_text(" ".join(args.text), input_method))
    else:
        for line in sys.stdin:
            print(compose_text(line.rstrip("\n"), input_method))
    return 0


async def replay(settings: Settings, replayer: Replayer) -> str:
    session = TypingSession.from_settings(settings)
    text = ""
    async with trio.open_nursery() as nursery:
        send_channel, receive_channel = trio.open_memory_channel(0)
        nursery.start_soon(replayer.run, send_channel)
        async with make_keystream(receive_channel, settings, session) as keystream:
            async for composed in keystream:
                text = apply_composed(text, composed)
    return text


replay_parser = argparse.ArgumentParser(description="Replay a recorded key event stream through the composer.")
replay_parser.add_argument("settings", type=pathlib.Path)
replay_parser.add_argument("recording", type=pathlib.Path)
replay_parser.add_argument("-v", "--verbose", action="store_true")


def replay_cli(argv=None):
    args = replay_parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        settings = Settings.load(args.settings)
        replayer = Replayer.load(args.recording)
    except VikeyError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(trio.run(replay, settings, replayer))
    return 0
