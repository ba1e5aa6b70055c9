import sys
import os
import plar

EXTENSION = plar.DEFAULT_CONFIG['extension']
CONFIG_FILE = '.config'

HELP = (
    "Comandos:\n"
    "  ajuda, help: Mostra esta mensagem\n"
    "  sair, exit: Sai do shell\n"
    "  run <caminho>: Executa um arquivo\n"
    "  reset: Reinicia o interpretador\n"
    "  <codigo>: Executa o codigo"
)

def read_config(path=CONFIG_FILE):
    config = {}
    if not os.path.exists(path):
        return config

    with open(path, 'r', encoding='utf-8') as f:
        for entry in f.read().split(';'):
            if '=' not in entry: continue
            key, value = entry.split('=', 1)
            config[key.strip()] = value.strip().strip("'")
    return config

def write_config(main_file, path=CONFIG_FILE):
    limit = read_config(path).get('limite_iteracoes', plar.DEFAULT_CONFIG['limite-iteracoes'])
    with open(path, 'w', encoding='utf-8') as f:
        f.write(f"access_point_main={main_file};")
        f.write(f"\nversion={plar.DEFAULT_CONFIG['version']};")
        f.write(f"\nlimite_iteracoes={limit};")

def make_interpreter(config):
    max_iterations = plar.DEFAULT_CONFIG['limite-iteracoes']
    if 'limite_iteracoes' in config:
        try:
            max_iterations = int(config['limite_iteracoes'])
        except ValueError:
            print(f"Valor invalido para limite_iteracoes: '{config['limite_iteracoes']}', usando {max_iterations}.")
    return plar.Interpreter(max_iterations=max_iterations)

def run_file(filename, interpreter):
    if not filename.endswith(EXTENSION):
        filename += EXTENSION

    try:
        with open(filename, 'r', encoding='utf-8') as f:
            text = f.read()
    except FileNotFoundError:
        print(f"Arquivo {filename} nao encontrado. Use o comando: \"plar <arquivo>\"")
        return False

    if not text:
        print("Arquivo vazio, favor adicionar algum codigo.")
        return True

    interpreter.base_path = os.path.dirname(os.path.abspath(filename))
    _, error, _ = plar.run(filename, text, interpreter)
    return error is None

def shell(config):
    interpreter = make_interpreter(config)
    print("Digite 'sair' para sair e 'ajuda' para ver os comandos")

    while True:
        try:
            text = input('plar > ').strip()
        except EOFError:
            break

        if text in ('sair', 'exit'):
            break
        elif text == '':
            continue
        elif text in ('ajuda', 'help'):
            print(HELP)
        elif text.startswith('run '):
            run_file(text[4:].strip(), interpreter)
        elif text == 'reset':
            interpreter = make_interpreter(config)
        else:
            plar.run('<stdin>', text, interpreter)

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print("Informe um arquivo como argumento.")
        return 1

    sys.setrecursionlimit(10000)
    command = argv[0]
    config = read_config()

    if command == '__shell__':
        shell(config)

    elif command == 'setmain':
        if len(argv) < 2:
            print("Use: plar setmain <arquivo>")
            return 1
        main_file = argv[1]
        if not main_file.endswith(EXTENSION):
            main_file += EXTENSION
        write_config(main_file)

    elif command in ('iniciar', 'init', '--init'):
        write_config(argv[1] if len(argv) > 1 else 'not-defined')

    elif command == '.':
        filename = config.get('access_point_main', 'not-defined')
        if filename == 'not-defined':
            print("Parece que um arquivo principal nao foi definido, use plar setmain <arquivo> para definir um arquivo principal.")
            return 1
        return 0 if run_file(filename, make_interpreter(config)) else 1

    elif command in ('--config', '-c'):
        print(plar.DEFAULT_CONFIG)

    elif command in ('--version', '-v'):
        print(plar.DEFAULT_CONFIG['version'])

    elif command == 'special-keys':
        for k, v in plar.DEFAULT_CONFIG['special-keys'].items():
            print(f'{k}: {v}\n')

    else:
        return 0 if run_file(command, make_interpreter(config)) else 1

    return 0

if __name__ == '__main__':
    sys.exit(main())
