from unittest.mock import MagicMock, patch

import pytest
import requests

from postos_vizinhanca.domain.exceptions import FetchError, ValidationError
from postos_vizinhanca.infrastructure.remote_loader import baixar_planilha, carregar_planilha_remota

URL = "https://exemplo.test/Pasta1.xlsx"


@patch("postos_vizinhanca.infrastructure.remote_loader.requests.get")
def test_carregar_remoto_sucesso(mock_get, xlsx_valido):
    mock_resp = MagicMock()
    mock_resp.ok = True
    mock_resp.status_code = 200
    mock_resp.content = xlsx_valido
    mock_get.return_value = mock_resp

    postos = carregar_planilha_remota(URL)

    assert len(postos) == 3
    assert mock_get.call_args[0][0] == URL


@patch("postos_vizinhanca.infrastructure.remote_loader.requests.get")
def test_status_de_erro_vira_fetch_error(mock_get):
    mock_resp = MagicMock()
    mock_resp.ok = False
    mock_resp.status_code = 404
    mock_get.return_value = mock_resp

    with pytest.raises(FetchError) as exc:
        baixar_planilha(URL)

    assert exc.value.status_code == 404
    assert exc.value.url == URL


@patch("postos_vizinhanca.infrastructure.remote_loader.requests.get")
def test_falha_de_conexao_vira_fetch_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("sem rede")

    with pytest.raises(FetchError, match="Verifique sua conexão"):
        carregar_planilha_remota(URL)
    assert mock_get.call_count == 1


@patch("postos_vizinhanca.infrastructure.remote_loader.requests.get")
def test_conteudo_invalido_continua_validation_error(mock_get, xlsx_latitude_invalida):
    mock_resp = MagicMock()
    mock_resp.ok = True
    mock_resp.content = xlsx_latitude_invalida
    mock_get.return_value = mock_resp

    with pytest.raises(ValidationError):
        carregar_planilha_remota(URL)
