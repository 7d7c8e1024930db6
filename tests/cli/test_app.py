from unittest.mock import MagicMock, patch


class TestBuildServices:
    @patch("tripbill.cli.app.get_storage")
    def test_returns_session_and_invoice_service(self, mock_storage):
        from tripbill.cli.app import _build_services
        from tripbill.services.billing_service import BillingSession
        from tripbill.services.invoice_service import InvoiceService

        session, invoice_service = _build_services()
        assert isinstance(session, BillingSession)
        assert isinstance(invoice_service, InvoiceService)
        assert invoice_service.storage is mock_storage.return_value


class TestMainMenu:
    @patch("tripbill.cli.app._build_services")
    @patch("tripbill.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from tripbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.return_value = "Exit"

        main_menu()
        mock_q.select.return_value.ask.assert_called_once()

    @patch("tripbill.cli.app._build_services")
    @patch("tripbill.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from tripbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.return_value = None

        main_menu()

    @patch("tripbill.cli.app._build_services")
    @patch("tripbill.cli.app.questionary")
    @patch("tripbill.cli.app.create_invoice_menu")
    def test_create_invoice(self, mock_create, mock_q, mock_build):
        from tripbill.cli.app import main_menu

        session, invoice_service = MagicMock(), MagicMock()
        mock_build.return_value = (session, invoice_service)
        mock_q.select.return_value.ask.side_effect = ["Create Invoice", "Exit"]

        main_menu()
        mock_create.assert_called_once_with(session, invoice_service)

    @patch("tripbill.cli.app._build_services")
    @patch("tripbill.cli.app.questionary")
    @patch("tripbill.cli.app.preview_invoice_menu")
    def test_preview_invoice(self, mock_preview, mock_q, mock_build):
        from tripbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.side_effect = ["Preview Invoice", "Exit"]

        main_menu()
        mock_preview.assert_called_once()

    @patch("tripbill.cli.app._build_services")
    @patch("tripbill.cli.app.questionary")
    @patch("tripbill.cli.app.export_invoice_menu")
    def test_export_pdf(self, mock_export, mock_q, mock_build):
        from tripbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.side_effect = ["Export PDF", "Exit"]

        main_menu()
        mock_export.assert_called_once()

    @patch("tripbill.cli.app._build_services")
    @patch("tripbill.cli.app.questionary")
    def test_start_new_draft(self, mock_q, mock_build):
        from tripbill.cli.app import main_menu

        session = MagicMock()
        mock_build.return_value = (session, MagicMock())
        mock_q.select.return_value.ask.side_effect = ["Start New Draft", "Exit"]

        main_menu()
        session.reset.assert_called_once()

    @patch("tripbill.cli.app._build_services")
    @patch("tripbill.cli.app.questionary")
    def test_unrecognized_choice_loops(self, mock_q, mock_build):
        from tripbill.cli.app import main_menu

        mock_build.return_value = (MagicMock(), MagicMock())
        mock_q.select.return_value.ask.side_effect = ["Unknown Option", "Exit"]

        main_menu()
        assert mock_q.select.return_value.ask.call_count == 2


class TestMain:
    @patch("tripbill.__main__.main_menu")
    @patch("tripbill.__main__.configure_logging")
    def test_configures_logging_then_runs_menu(self, mock_logging, mock_menu):
        from tripbill.__main__ import main

        main()
        mock_logging.assert_called_once()
        mock_menu.assert_called_once()
