import pytest

from dwmkit.state import (
    ClientFields,
    MonitorFields,
    pack_float_position,
    pack_float_size,
    unpack_float_position,
    unpack_float_size,
)


def test_monitor_fields_round_trip():
    fields = MonitorFields(nmaster=2, nstack=1, layout=3, ltaxis=(5, 2, 1, 3), showbar=True)
    assert MonitorFields.unpack(fields.pack()) == fields


def test_monitor_fields_fit_in_32_bits():
    fields = MonitorFields(nmaster=7, nstack=7, layout=15, ltaxis=(-14, 10, 10, 3), showbar=True)
    assert 0 <= fields.pack() < 1 << 32


def test_monitor_showbar_is_top_bit():
    assert MonitorFields(showbar=True).pack() == 1 << 31
    assert MonitorFields().pack() == 0


def test_monitor_mirrored_layout_is_restored():
    fields = MonitorFields(ltaxis=(-5, 1, 2, 0))
    restored = MonitorFields.unpack(fields.pack())
    assert restored.ltaxis[:3] == fields.ltaxis[:3]


def test_monitor_mirror_bit_overlaps_stack2_field():
    # The mirror flag shares a bit with the secondary stack field.
    restored = MonitorFields.unpack(MonitorFields(ltaxis=(-5, 1, 2, 0)).pack())
    assert restored.ltaxis[3] == 4


def test_client_fields_round_trip():
    fields = ClientFields(monitor=3, idx=42, isfloating=True, isterminal=True,
                          noswallow=False, issticky=True, scratchkey=ord("s"))
    assert ClientFields.unpack(fields.pack()) == fields


def test_client_floating_bit_position():
    assert ClientFields(isfloating=True).pack() == 1 << 11
    assert ClientFields(issticky=True).pack() == 1 << 16


def test_float_position_round_trip():
    value = pack_float_position(1300, 250, 1280, 0)
    assert unpack_float_position(value, 1280, 0) == (1300, 250)


def test_float_position_clamps_to_monitor_origin():
    value = pack_float_position(1270, -20, 1280, 0)
    assert unpack_float_position(value, 1280, 0) == (1280, 0)


def test_float_size_round_trip():
    assert unpack_float_size(pack_float_size(640, 480)) == (640, 480)


def test_float_size_zero_is_rejected():
    with pytest.raises(ValueError):
        unpack_float_size(pack_float_size(0, 480))
    with pytest.raises(ValueError):
        unpack_float_size(0)