# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do orderflow.

Garantem apenas que o pacote importa e expõe a superfície pública
esperada. Não testam comportamento de domínio nem fluxo de execução.
"""

import orderflow


def test_smoke():
    """
    O pacote importa e publica o ponto de composição.

    Limites explícitos:
        - Não executa o workflow
        - Não deve acumular asserts funcionais
    """
    assert orderflow.__version__
    assert callable(orderflow.build_place_order)
