"""
Core do orderflow.

Reúne as estruturas independentes de domínio usadas pelo workflow:
    - result         → formas de retorno (Ok / Err / NonEmptyList)
    - errors         → taxonomia canônica de erros do workflow
    - exceptions     → falhas de programação e montagem
    - config         → carregamento, merge, hashing e settings
    - context        → contexto isolado por invocação (logs + trace)
    - traceability   → máquina de estados e trace de execução

O core não depende de colaboradores concretos, transporte ou persistência.
"""
