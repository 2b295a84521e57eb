import sys
import os
import json
import argparse

# --- AJUSTE DE RUTAS ---
current_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.abspath(os.path.join(current_dir, '..'))
sys.path.insert(0, root_dir)

# --- IMPORTACIONES ---
from starchain.infra.crypto.message_signer import MessageSigner

def generate_identity() -> None:
    print("🔑 Generando clave secp256k1...")
    signer = MessageSigner.generate()

    print(json.dumps({
        "address": signer.get_address(),
        "public_key": signer.get_public_key(),
        "private_key": signer.private_key_hex,
    }, indent=4))
    print("\n⚠️  Guarda la clave privada fuera de este equipo. Nunca la envíes por internet.")

def sign_challenge(private_key_hex: str, message: str) -> None:
    signer = MessageSigner(private_key_hex)
    signature = signer.sign_message(message)

    print(json.dumps({
        "address": signer.get_address(),
        "message": message,
        "signature": signature,
    }, indent=4))

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Herramienta de cliente: claves y firma del mensaje de reto")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("new", help="Genera una identidad nueva")

    sign = sub.add_parser("sign", help="Firma el mensaje devuelto por /requestValidation")
    sign.add_argument("private_key", help="Clave privada en hex")
    sign.add_argument("message", help="Mensaje '<address>:<timestamp>:starRegistry'")

    args = parser.parse_args()

    if args.command == "new":
        generate_identity()
    else:
        sign_challenge(args.private_key, args.message)
