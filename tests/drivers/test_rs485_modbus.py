from unittest.mock import MagicMock, patch

import pytest

from pi_clock.drivers.rs485_modbus import ModbusRtuConfig, RS485ModbusRTU


@pytest.fixture
def client():
    with patch("pi_clock.drivers.rs485_modbus.ModbusSerialClient") as cls:
        instance = cls.return_value
        instance.connect.return_value = True
        yield instance


def ok(registers):
    rr = MagicMock()
    rr.isError.return_value = False
    rr.registers = registers
    return rr


class TestRS485ModbusRTU:
    def test_reads_holding_registers(self, client):
        client.read_holding_registers.return_value = ok([0, 1234])
        driver = RS485ModbusRTU(ModbusRtuConfig(slave_id=5))

        assert driver.read_registers(3, 2, 2) == [0, 1234]
        client.connect.assert_called_once()
        client.read_holding_registers.assert_called_once_with(address=2, count=2, device_id=5)

    def test_reads_input_registers(self, client):
        client.read_input_registers.return_value = ok([7])
        driver = RS485ModbusRTU(ModbusRtuConfig())

        assert driver.read_registers(4, 0, 1) == [7]

    def test_rejects_unknown_function_code(self, client):
        with pytest.raises(ValueError):
            RS485ModbusRTU(ModbusRtuConfig()).read_registers(6, 0, 1)

    def test_read_error_forces_reconnect(self, client):
        bad = MagicMock()
        bad.isError.return_value = True
        client.read_holding_registers.side_effect = [bad, ok([1, 2])]
        driver = RS485ModbusRTU(ModbusRtuConfig())

        with pytest.raises(RuntimeError):
            driver.read_registers(3, 2, 2)
        assert driver.read_registers(3, 2, 2) == [1, 2]
        assert client.connect.call_count == 2

    def test_connect_failure_backs_off(self, client):
        client.connect.return_value = False
        driver = RS485ModbusRTU(ModbusRtuConfig(reconnect_backoff_s=0.0))

        with pytest.raises(RuntimeError, match="Unable to connect"):
            driver.read_registers(3, 2, 2)
