import pytest

from cqsimbe import comms
from cqsimbe.comms import (
    DeviceLink,
    finalise_device,
    host_send_ctrl_op,
    host_wait_ctrl_op,
    initialise_device,
)
from cqsimbe.control import Flag, KernelParams
from cqsimbe.datatypes import CqStatus, CQError, CtrlCode
from cqsimbe.resources import AllocParams, qregistry


@pytest.fixture
def link():
    device = DeviceLink()
    device.initialise(0)
    yield device
    if device.run_device:
        device.finalise(0)


def test_initialise_device():
    device = DeviceLink()
    assert device.initialise(0) == CqStatus.SUCCESS
    assert device.run_device is True
    assert device.new_op is False
    assert device.ctrl_op_complete is True
    device.finalise(0)


def test_send_and_wait_ctrl_op(link):
    flag = Flag()
    link.send(CtrlCode.TEST, flag)
    assert link.wait() == CqStatus.SUCCESS
    assert flag.value is True
    assert link.new_op is False
    assert link.ctrl_op_complete is True
    assert link.op == CtrlCode.TEST
    assert link.op_params is flag


def test_second_test_op_warns(link):
    flag = Flag()
    link.send(CtrlCode.TEST, flag)
    link.wait()
    link.send(CtrlCode.TEST, flag)
    assert link.wait() == CqStatus.WARNING


def test_finalise_device(link):
    assert link.finalise(0) == CqStatus.SUCCESS
    assert link.run_device is False
    assert link.new_op is False
    assert link.ctrl_op_complete is True
    with pytest.raises(CQError):
        link.send(CtrlCode.TEST, Flag())


def test_alloc_through_device(link):
    params = AllocParams(3)
    link.send(CtrlCode.ALLOC, params)
    assert link.wait() == CqStatus.SUCCESS
    assert params.status == CqStatus.SUCCESS
    assert qregistry.is_available(params.qregistry_idx) is False
    link.send(CtrlCode.DEALLOC, params)
    assert link.wait() == CqStatus.SUCCESS
    assert qregistry.is_available(params.qregistry_idx) is True


def test_finalise_clears_registry(link):
    params = AllocParams(2)
    link.send(CtrlCode.ALLOC, params)
    assert link.wait() == CqStatus.SUCCESS
    assert params.status == CqStatus.SUCCESS
    assert qregistry.num_registers >= 1
    assert link.finalise(0) == CqStatus.SUCCESS
    assert qregistry.num_registers == 0
    assert qregistry.is_available(params.qregistry_idx) is True


def test_device_error_is_raised_on_wait(link):
    link.send(CtrlCode.RUN_QKERNEL, KernelParams("comms_missing_kernel", 1, [], None))
    with pytest.raises(CQError):
        link.wait()
    flag = Flag()
    link.send(CtrlCode.TEST, flag)
    assert link.wait() == CqStatus.SUCCESS
    assert flag.value is True


def test_double_initialise_raises(link):
    with pytest.raises(CQError):
        link.initialise(0)
    assert link.run_device is True


def test_finalise_without_initialise_raises():
    with pytest.raises(CQError):
        DeviceLink().finalise(0)


def test_send_unknown_op_raises(link):
    with pytest.raises(CQError):
        link.send(42, None)


def test_send_without_device_raises():
    with pytest.raises(CQError):
        DeviceLink().send(CtrlCode.TEST, Flag())


def test_verbose_messages(capsys):
    device = DeviceLink()
    device.initialise(1)
    device.finalise(1)
    out = capsys.readouterr().out
    assert "Initialising device." in out
    assert "Finalising device." in out


def test_module_level_functions(monkeypatch):
    monkeypatch.setattr(comms, "dev_ctrl", DeviceLink())
    assert initialise_device(0) == CqStatus.SUCCESS
    flag = Flag()
    host_send_ctrl_op(CtrlCode.TEST, flag)
    assert host_wait_ctrl_op() == CqStatus.SUCCESS
    assert flag.value is True
    assert finalise_device(0) == CqStatus.SUCCESS
    assert comms.dev_ctrl.run_device is False