from unittest.mock import MagicMock

import pytest

pytest.importorskip("tkinter")

import main as main_module
from bookshelf.config import ConfigError


def test_config_error_dialog_uses_hidden_root(monkeypatch):
    def broken_config():
        raise ConfigError("BOOKSHELF_API_URL invalide")

    fake_tk = MagicMock()
    fake_messagebox = MagicMock()
    monkeypatch.setattr(main_module, "load_config", broken_config)
    monkeypatch.setattr(main_module, "tk", fake_tk)
    monkeypatch.setattr(main_module, "messagebox", fake_messagebox)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main()

    root = fake_tk.Tk.return_value
    assert excinfo.value.code == 1
    root.withdraw.assert_called_once_with()
    fake_messagebox.showerror.assert_called_once_with(
        "Configuration invalide", "BOOKSHELF_API_URL invalide", parent=root
    )
    root.destroy.assert_called_once_with()


def test_toast_notifier_is_used_through_show():
    from bookshelf.ui.toast import ToastNotifier

    assert callable(ToastNotifier.show)
    assert not callable(ToastNotifier.__dict__.get("__call__"))
