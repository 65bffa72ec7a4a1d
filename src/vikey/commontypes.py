# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum


@enum.unique
class InputMethod(enum.Enum):
    TELEX = "telex"
    VNI = "vni"

    @property
    def display_name(self):
        return "Telex" if self is InputMethod.TELEX else "VNI"


class VikeyError(Exception):
    pass


class SettingsError(VikeyError):
    pass
