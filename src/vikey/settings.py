import dataclasses
import json
import operator
import pathlib
import typing

import cattrs
from cattrs.errors import BaseValidationError
from cattrs.gen import make_dict_structure_fn

from .commontypes import InputMethod, SettingsError
from .device.eventsource import KeyCode

KEYMAPS = {
    "KEY_GRAVE": ["`", "~"],
    "KEY_1": ["1", "!"],
    "KEY_2": ["2", "@"],
    "KEY_3": ["3", "#"],
    "KEY_4": ["4", "$"],
    "KEY_5": ["5", "%"],
    "KEY_6": ["6", "^"],
    "KEY_7": ["7", "&"],
    "KEY_8": ["8", "*"],
    "KEY_9": ["9", "("],
    "KEY_0": ["0", ")"],
    "KEY_MINUS": ["-", "_"],
    "KEY_EQUAL": ["=", "+"],
    "KEY_Q": ["q", "Q"],
    "KEY_W": ["w", "W"],
    "KEY_E": ["e", "E"],
    "KEY_R": ["r", "R"],
    "KEY_T": ["t", "T"],
    "KEY_Y": ["y", "Y"],
    "KEY_U": ["u", "U"],
    "KEY_I": ["i", "I"],
    "KEY_O": ["o", "O"],
    "KEY_P": ["p", "P"],
    "KEY_LEFTBRACE": ["[", "{"],
    "KEY_RIGHTBRACE": ["]", "}"],
    "KEY_BACKSLASH": ["\\", "|"],
    "KEY_A": ["a", "A"],
    "KEY_S": ["s", "S"],
    "KEY_D": ["d", "D"],
    "KEY_F": ["f", "F"],
    "KEY_G": ["g", "G"],
    "KEY_H": ["h", "H"],
    "KEY_J": ["j", "J"],
    "KEY_K": ["k", "K"],
    "KEY_L": ["l", "L"],
    "KEY_SEMICOLON": [";", ":"],
    "KEY_APOSTROPHE": ["'", '"'],
    "KEY_Z": ["z", "Z"],
    "KEY_X": ["x", "X"],
    "KEY_C": ["c", "C"],
    "KEY_V": ["v", "V"],
    "KEY_B": ["b", "B"],
    "KEY_N": ["n", "N"],
    "KEY_M": ["m", "M"],
    "KEY_COMMA": [",", "<"],
    "KEY_DOT": [".", ">"],
    "KEY_SLASH": ["/", "?"],
    "KEY_SPACE": [" ", " "],
}


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(KeyCode, operator.attrgetter("name"))
settings_converter.register_structure_hook(KeyCode, lambda v, _: KeyCode[v])
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    input_method: InputMethod
    vietnamese_mode: bool
    keymaps: dict[KeyCode, list[str]]

    def set_input_method(self, input_method: InputMethod):
        self.input_method = input_method

    def toggle_vietnamese_mode(self):
        self.vietnamese_mode = not self.vietnamese_mode

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as outfile:
            json.dump(raw, outfile, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        try:
            with src.open() as infile:
                raw = json.load(infile)
            raw["_path"] = src
            return settings_converter.structure(raw, cls)
        except (OSError, ValueError, KeyError, TypeError, BaseValidationError) as exc:
            raise SettingsError(f"Could not load settings from {src}: {exc}") from exc

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "input_method": "telex",
                "vietnamese_mode": True,
                "keymaps": KEYMAPS,
            },
            cls,
        )


settings_converter.register_structure_hook(Settings, make_dict_structure_fn(Settings, settings_converter))
