from __future__ import annotations

import sys
from importlib.resources import files

USAGE = """Uso: orcamento-manutencao [comando]

Sem comando, abre a interface de orçamentos.

Comandos:
  init                    Cria o settings.yaml de exemplo no diretório de configuração
  modelo [destino]        Salva o modelo CSV de serviços (padrão: pasta Downloads)
  importar <arquivo.csv>  Importa serviços de um CSV para o catálogo
  ajuda                   Mostra esta mensagem
"""


def _init_config() -> None:
    """Copy the bundled settings template to the user's config directory."""
    from orcamento.config import get_config_dir, get_data_dir

    config_dir = get_config_dir()
    data_dir = get_data_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    data_dir.mkdir(parents=True, exist_ok=True)

    dest = config_dir / "settings.yaml"
    if dest.exists():
        print(f"  já existe: {dest}")
    else:
        src = files("orcamento") / "templates" / "settings.yaml.example"
        dest.write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
        print(f"  criado: {dest}")

    print()
    print(f"Configuração: {config_dir}")
    print(f"Dados:   {data_dir}")


def _export_model(args: list[str]) -> int:
    from orcamento.services.export import save_csv_model

    destination = args[0] if args else None
    try:
        path = save_csv_model(destination)
    except OSError as e:
        print(f"Erro: falha ao salvar o modelo CSV: {e}")
        return 1
    print(f"Modelo CSV salvo em: {path}")
    return 0


def _import_csv(args: list[str]) -> int:
    if not args:
        print("Erro: informe o arquivo CSV a importar.")
        print("Exemplo: orcamento-manutencao importar servicos.csv")
        return 1

    from orcamento.services.session import QuoteSession

    messages: list[str] = []
    session = QuoteSession.from_config(notify=lambda n: messages.append(n.text))
    ok = session.catalog.import_file(args[0])
    for text in messages:
        print(text)
    return 0 if ok else 1


def _preflight() -> None:
    """Make sure the data directory exists before launching the TUI."""
    from orcamento.config import get_data_dir

    data_dir = get_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        # Still usable: state stays in memory for the session.
        print(f"Aviso: diretório de dados indisponível ({data_dir}): {e}")


def main() -> None:
    """Entry point for the Orçamentos de Manutenção CLI/TUI."""
    from orcamento.config import setup_logging

    setup_logging()
    args = sys.argv[1:]
    command = args[0] if args else None

    if command == "init":
        _init_config()
        return
    if command == "modelo":
        sys.exit(_export_model(args[1:]))
    if command == "importar":
        sys.exit(_import_csv(args[1:]))
    if command in ("ajuda", "-h", "--help"):
        print(USAGE)
        return
    if command is not None:
        print(f"Comando desconhecido: {command}")
        print(USAGE)
        sys.exit(1)

    _preflight()

    from orcamento.tui.app import OrcamentoApp

    app = OrcamentoApp()
    app.run()


if __name__ == "__main__":
    main()
