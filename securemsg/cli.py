#!/usr/bin/env python3
"""
SecureMsg Console

Console front end for the two-party simulation. Shows keys, certificates and
envelopes, and drives send / verify / tamper.

Usage:
    securemsg demo --message "ola"
    securemsg interactive
"""

import argparse
import sys

from securemsg.config import configure_logging
from securemsg.common.exceptions import SecureMsgException, DecryptionError
from securemsg.common.protocol import PartyId, SecurityVerdict
from securemsg.crypto.pki import get_certificate_info
from securemsg.exchange import ExchangeEvent, MessageExchange, TamperTarget

VERDICT_MARKERS = {
    SecurityVerdict.SECURE: "[✓] SECURE",
    SecurityVerdict.WARNING: "[!] WARNING",
    SecurityVerdict.BREACH: "[✗] BREACH",
}


def print_event(event: ExchangeEvent):
    """Status line printed after every exchange state change."""
    verdict = VERDICT_MARKERS[event.verdict] if event.verdict else "-"
    print(f"  [*] state={event.state.value} verdict={verdict}")


def show_certificates(exchange: MessageExchange):
    print("\n[Certificates]")
    for party in PartyId:
        info = get_certificate_info(exchange.session.certificate(party))
        print(f"  {info['subject']}:")
        for key in ("issuer", "serial_number", "valid_from", "valid_until", "fingerprint", "valid"):
            print(f"    {key}: {info[key]}")


def show_message(exchange: MessageExchange):
    message = exchange.message
    if message is None:
        print("  [!] No message in flight")
        return

    print("\n[Message]")
    print(f"  sender:                  {message.sender.display_name}")
    print(f"  timestamp:               {message.timestamp.isoformat()}")
    print(f"  encrypted_content:       {message.encrypted_content[:48]}...")
    print(f"  encrypted_symmetric_key: {message.encrypted_symmetric_key[:48]}...")
    print(f"  message_hash:            {message.message_hash}")
    print(f"  signature:               {message.signature[:48]}...")
    print(f"  certificate serial:      {message.certificate.serial_number}")


def verify_and_report(exchange: MessageExchange, receiver: PartyId):
    """Verify the in-flight message as receiver and print each stage."""
    print(f"\n[Verify] {receiver.display_name} verifies the message")
    try:
        result = exchange.verify(receiver)
    except DecryptionError as e:
        print(f"  [✗] Decryption failed: {e}")
        return

    for step in result.steps:
        marker = "[✓]" if step.passed else "[✗]"
        print(f"  {marker} {step.name} {step.detail}")

    print(f"  => {VERDICT_MARKERS[result.verdict]}")
    if result.failure:
        print(f"     reason: {result.failure.value}")
    if result.plaintext is not None and result.verdict is SecurityVerdict.SECURE:
        print(f"     plaintext: {result.plaintext}")


def run_demo(message_text: str):
    """Secure scenario followed by one tamper scenario per field."""
    print("[*] Provisioning Alice and Bob...")
    exchange = MessageExchange()
    exchange.subscribe(print_event)
    show_certificates(exchange)

    print(f"\n[Send] Alice -> Bob: {message_text!r}")
    exchange.send(message_text, PartyId.ALICE)
    show_message(exchange)
    verify_and_report(exchange, PartyId.BOB)

    for target in TamperTarget:
        print(f"\n[Tamper] Resending and corrupting {target.value}")
        exchange.send(message_text, PartyId.ALICE)
        exchange.tamper(target)
        verify_and_report(exchange, PartyId.BOB)


def parse_party(value: str) -> PartyId:
    try:
        return PartyId(value.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown party: {value!r} (expected alice or bob)")


def run_interactive():
    """Prompt loop: send, verify, tamper, show, certs, reset, exit."""
    print("[*] Provisioning Alice and Bob...")
    exchange = MessageExchange()
    exchange.subscribe(print_event)

    print("="*70)
    print("  Commands: send <alice|bob> <text> | verify <alice|bob> | tamper")
    print("            show | certs | reset | exit")
    print("="*70 + "\n")

    while True:
        try:
            line = input("securemsg> ").strip()
        except (KeyboardInterrupt, EOFError):
            print()
            break

        if not line:
            continue

        command, _, rest = line.partition(" ")
        command = command.lower()

        try:
            if command == "exit":
                break
            elif command == "send":
                party, _, text = rest.partition(" ")
                exchange.send(text, parse_party(party))
            elif command == "verify":
                verify_and_report(exchange, parse_party(rest))
            elif command == "tamper":
                exchange.tamper()
                print("  [!] Message tampered for demonstration")
            elif command == "show":
                show_message(exchange)
            elif command == "certs":
                show_certificates(exchange)
            elif command == "reset":
                exchange.reset()
                print("  [✓] New keys and certificates generated")
            else:
                print(f"  [!] Unknown command: {command}")
        except (SecureMsgException, ValueError) as e:
            print(f"  [!] Error: {e}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Secure two-party messaging simulator (hybrid encryption, signatures, CA)"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: LOG_LEVEL from environment or INFO)"
    )
    subparsers = parser.add_subparsers(dest="command")

    demo = subparsers.add_parser("demo", help="Run the scripted secure and tamper scenarios")
    demo.add_argument(
        "--message",
        default="ola",
        help="Plaintext Alice sends to Bob (default: ola)"
    )
    subparsers.add_parser("interactive", help="Interactive prompt")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "interactive":
        run_interactive()
    else:
        run_demo(getattr(args, "message", "ola"))

    return 0


if __name__ == "__main__":
    sys.exit(main())
