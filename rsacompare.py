#!/usr/bin/env python3
# -*- coding: utf-8 -*-

r"""
rsacompare: RSA attack time comparison (brute force M vs. factor N).

Recovers the plaintext of a textbook-RSA ciphertext two ways and times both:
  1) Brute force: try every m in [0, n) until m^e mod n == c.
  2) Factoring:   trial-divide n = p*q, derive d = e^-1 mod phi(n), m = c^d mod n.

Usage examples:
  python3 rsacompare.py -n 187 -e 7 -c 11
  python3 rsacompare.py -n 3233 -e 17 -c 65 --attack factoring
  python3 rsacompare.py --publickey toy.pem -c 0x41
  python3 rsacompare.py --demo 12            # random toy key + message
  python3 rsacompare.py                      # interactive menu
"""

import argparse
import enum
import logging
import math
import os
import random
import sys
import textwrap
import threading
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# Third-party
try:
    from Crypto.PublicKey import RSA
    from Crypto.Util.number import getPrime, long_to_bytes
except Exception:
    print("Please install pycryptodome: pip install pycryptodome", file=sys.stderr)
    sys.exit(1)

try:
    import gmpy2
except Exception:
    print("Please install gmpy2: pip install gmpy2", file=sys.stderr)
    sys.exit(1)


# ========= Colors & UI =========
class Colors:
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"

    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    CYAN = "\x1b[36m"

def banner() -> str:
    return (
        f"{Colors.CYAN}╔═══════════════════════════════════════════════════╗\n"
        f"{Colors.CYAN}║           {Colors.BOLD}RSA Attack Time Comparison{Colors.RESET}{Colors.CYAN}              ║\n"
        f"{Colors.CYAN}║      {Colors.RESET}{Colors.YELLOW}brute force M  vs.  factor N and derive d{Colors.RESET}{Colors.CYAN}    ║\n"
        f"{Colors.CYAN}╚═══════════════════════════════════════════════════╝{Colors.RESET}\n"
    )

def box(title: str, lines: List[str]) -> str:
    if not lines:
        lines = [""]
    w = max(len(title) + 2, *(len(l) for l in lines)) + 4
    top = "╔" + "═" * (w - 2) + "╗"
    mid = "╠" + "═" * (w - 2) + "╣"
    bot = "╚" + "═" * (w - 2) + "╝"
    out = [top, f"║ {title.center(w-4)} ║", mid]
    for l in lines:
        out.append("║ " + l.ljust(w - 4) + " ║")
    out.append(bot)
    return "\n".join(out)

def one_line(status: Optional["Outcome"], name: str, ms: float) -> str:
    # status None = SKIP
    if status is None:
        label = f"{Colors.YELLOW}↷ SKIP{Colors.RESET}"
    elif status is Outcome.SUCCESS:
        label = f"{Colors.GREEN}✓ OK{Colors.RESET}"
    else:
        label = f"{Colors.RED}✗ {status.value.upper()}{Colors.RESET}"
    return f"{Colors.CYAN}→ {Colors.BOLD}{name:<14}{Colors.RESET} {label} {Colors.DIM}[{ms:.3f} ms]{Colors.RESET}"


# ========= Utils =========
def parse_int_auto(s: str) -> int:
    s = s.strip()
    if s.lower().startswith("0x"):
        return int(s, 16)
    # allow underscores like Python literal 1_000
    return int(s.replace("_", ""))

def is_printable_bytes(b: bytes) -> bool:
    try:
        s = b.decode('ascii')
    except UnicodeDecodeError:
        return False
    # consider printable if at least 90% printable chars
    printable = sum(1 for ch in s if 32 <= ord(ch) < 127)
    return printable >= 0.9 * max(1, len(s))


# ========= Data =========
NO_INVERSE = 0   # mod_inverse sentinel: gcd(e, phi) != 1
NOT_FOUND = -1   # brute_force_decrypt sentinel: no m in [0, n)

DEFAULT_E = 65537


class Outcome(enum.Enum):
    SUCCESS = "ok"
    NOT_FOUND = "not-found"
    NO_INVERSE = "no-inverse"
    MALFORMED_MODULUS = "malformed-modulus"
    ERROR = "error"


@dataclass
class PubKey:
    n: int
    e: int
    label: str = ""

@dataclass(frozen=True)
class FactoringResult:
    m: int
    p: int
    q: int
    d: int
    phi: int

@dataclass
class AttackResult:
    name: str
    status: Outcome
    plaintext: Optional[int] = None
    info: str = ""
    recovered_d: Optional[int] = None
    recovered_pq: Optional[Tuple[int, int]] = None
    elapsed: float = 0.0  # milliseconds

    @property
    def success(self) -> bool:
        return self.status is Outcome.SUCCESS


# ========= Errors =========
class RsaAttackError(Exception):
    """Base class for detectable attack failures. Each maps to one Outcome."""
    outcome = Outcome.ERROR


class NoInverseExists(RsaAttackError):
    outcome = Outcome.NO_INVERSE

    def __init__(self, e: int, phi: int, gcd: int):
        super().__init__(f"e={e} has no inverse mod phi={phi} (gcd={gcd})")
        self.e = e
        self.phi = phi
        self.gcd = gcd


class MalformedModulus(RsaAttackError):
    outcome = Outcome.MALFORMED_MODULUS

    def __init__(self, n: int, factors: List[int]):
        super().__init__(f"n={n} is not a product of two distinct primes (factors={factors})")
        self.n = n
        self.factors = factors


class PlaintextNotFound(RsaAttackError):
    outcome = Outcome.NOT_FOUND

    def __init__(self, e: int, n: int, c: int):
        super().__init__(f"no m in [0, {n}) with m^{e} mod {n} == {c}")
        self.e = e
        self.n = n
        self.c = c


# ========= Arithmetic core =========
def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Square-and-multiply: base^exponent mod modulus, result in [0, modulus)."""
    if modulus <= 0:
        raise ValueError(f"modulus must be positive, got {modulus}")
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    result = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return result

def prime_factors(n: int) -> List[int]:
    """Trial division. Returns every prime factor of n, ascending, with multiplicity."""
    out: List[int] = []
    if n < 2:
        return out
    while n % 2 == 0:
        out.append(2)
        n //= 2
    f = 3
    limit = int(gmpy2.isqrt(n))
    while f <= limit:
        if n % f == 0:
            while n % f == 0:
                out.append(f)
                n //= f
            limit = int(gmpy2.isqrt(n))
        f += 2
    # whatever survives past sqrt is prime
    if n > 1:
        out.append(n)
    return out

def factor_two_primes(n: int) -> Tuple[int, int]:
    """
    Split an RSA modulus into (p, q) with p <= q.

    Raises MalformedModulus unless trial division finds exactly two primes
    (a prime n or three or more factors). A square p*p still splits as (p, p).
    """
    factors = prime_factors(n)
    if len(factors) != 2:
        raise MalformedModulus(n, factors)
    return factors[0], factors[1]

def totient(p: int, q: int) -> int:
    return (p - 1) * (q - 1)

def mod_inverse(e: int, phi: int) -> int:
    """
    Extended Euclid on (e, phi). Returns d in [0, phi) with e*d = 1 (mod phi),
    or NO_INVERSE (0) when gcd(e, phi) != 1.
    """
    if phi <= 1:
        raise ValueError(f"phi must be greater than 1, got {phi}")
    if e <= 0:
        raise ValueError(f"e must be positive, got {e}")
    old_r, r = e, phi
    old_s, s = 1, 0
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
    # old_r = gcd(e, phi), old_s * e = old_r (mod phi)
    if old_r != 1:
        return NO_INVERSE
    return old_s % phi

def private_exponent(e: int, phi: int) -> int:
    d = mod_inverse(e, phi)
    if d == NO_INVERSE:
        raise NoInverseExists(e, phi, math.gcd(e, phi))
    return d


# ========= Attacks =========
def brute_force_decrypt(e: int, n: int, c: int) -> int:
    """Linear search for m with m^e mod n == c. Returns NOT_FOUND (-1) if none."""
    for m in range(n):
        if mod_pow(m, e, n) == c:
            return m
    return NOT_FOUND

def factor_and_decrypt(e: int, n: int, c: int) -> FactoringResult:
    """
    Factor n, derive d = e^-1 mod phi(n) and decrypt c directly.

    Raises MalformedModulus or NoInverseExists; never returns a plaintext built
    from a bad d.
    """
    p, q = factor_two_primes(n)
    # (p-1)(q-1) is only phi(n) for distinct primes
    if p == q:
        raise MalformedModulus(n, [p, q])
    phi = totient(p, q)
    d = private_exponent(e, phi)
    return FactoringResult(m=mod_pow(c, d, n), p=p, q=q, d=d, phi=phi)

def generate_toy_key(bits: int, e: int = DEFAULT_E, max_tries: int = 1000) -> Tuple[PubKey, int, int, int]:
    """Random key with two distinct `bits`-bit primes. Returns (key, d, p, q), p < q."""
    if bits < 3:
        raise ValueError(f"need at least 3-bit primes, got {bits}")
    if e < 3 or e % 2 == 0:
        raise ValueError(f"e must be an odd integer >= 3, got {e}")
    for _ in range(max_tries):
        p, q = sorted((getPrime(bits), getPrime(bits)))
        if p == q:
            continue
        d = mod_inverse(e, totient(p, q))
        if d != NO_INVERSE:
            return PubKey(n=p * q, e=e, label=f"toy-{bits}bit"), d, p, q
    raise ValueError(f"no {bits}-bit prime pair gives phi coprime to e={e}")


# ========= Attack Base =========
class Attack:
    name = "base"
    priority = 999

    def can_run(self, key: PubKey, c: int) -> bool:
        return key.n > 1 and key.e > 0

    def attempt(self, key: PubKey, c: int, log) -> AttackResult:
        raise NotImplementedError

    def run(self, key: PubKey, c: int, log) -> AttackResult:
        try:
            return self.attempt(key, c, log)
        except RsaAttackError as ex:
            log.debug(f"[{self.name}] {ex}")
            return AttackResult(self.name, ex.outcome, info=str(ex))


class FactoringAttack(Attack):
    name = "factoring"; priority = 20

    def attempt(self, key, c, log):
        res = factor_and_decrypt(key.e, key.n, c)
        log.debug(f"[{self.name}] p={res.p} q={res.q} phi={res.phi} d={res.d}")
        return AttackResult(self.name, Outcome.SUCCESS, res.m, info="c^d mod n",
                            recovered_d=res.d, recovered_pq=(res.p, res.q))


class BruteForceAttack(Attack):
    name = "brute_force"; priority = 90

    def attempt(self, key, c, log):
        log.debug(f"[{self.name}] scanning up to {key.n} candidates (e={key.e})")
        m = brute_force_decrypt(key.e, key.n, c)
        if m == NOT_FOUND:
            raise PlaintextNotFound(key.e, key.n, c)
        return AttackResult(self.name, Outcome.SUCCESS, m, info="m^e mod n == c")


def run_attack(attack: Attack, key: PubKey, c: int, log) -> AttackResult:
    """Run one attack and stamp the wall-clock duration (ms) on its result."""
    t0 = time.perf_counter()
    res = attack.run(key, c, log)
    res.elapsed = (time.perf_counter() - t0) * 1000.0
    return res


# ========= CLI / Engine =========
ALL_ATTACKS = [
    BruteForceAttack(),
    FactoringAttack(),
]

# Est. durations (sec) used for progress display (informational only)
ESTIMATED_SECONDS = {
    "factoring": 0.5,
    "brute_force": 5.0,
}

MENU_CHOICES: Dict[str, List[str]] = {
    "1": ["brute_force"],
    "2": ["factoring"],
    "3": ["brute_force", "factoring"],
}


def parse_args(argv: Optional[List[str]] = None):
    attack_names = ", ".join(a.name for a in sorted(ALL_ATTACKS, key=lambda x: x.priority))
    p = argparse.ArgumentParser(
        prog="rsacompare",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(f"""
Examples:
  rsacompare -n 187 -e 7 -c 11
  rsacompare -n 3233 -e 17 -c 65 --attack factoring
  rsacompare --publickey toy.pem -c 0x41
  rsacompare --demo 12

Available attacks: [{attack_names}]

Run without a key to get the interactive menu.
""")
    )
    p.add_argument("--publickey", help="PEM file holding the RSA public key", default=None)
    p.add_argument("-n", help="modulus N (dec/hex)", default=None)
    p.add_argument("-e", help=f"exponent e (dec/hex, default {DEFAULT_E})", default=None)
    p.add_argument("-c", "--decrypt", help="ciphertext C (dec/hex)", default=None)
    p.add_argument("--attack", help="limit to one or more attacks (comma-separated)", default=None)
    p.add_argument("--demo", type=int, metavar="BITS", default=None,
                   help="generate a toy key from two BITS-bit primes and encrypt a random message")
    p.add_argument("--verbosity", choices=["DEBUG", "INFO", "WARN", "ERROR"], default="INFO")
    return p.parse_args(argv)

def load_key_from_pem(path: str, log) -> Optional[PubKey]:
    try:
        with open(path, "rb") as fh:
            key = RSA.import_key(fh.read())
    except (OSError, ValueError, IndexError, TypeError) as ex:
        log.warning(f"Could not parse PEM {path}: {ex}")
        return None
    return PubKey(n=int(key.n), e=int(key.e), label=os.path.basename(path))

def pick_attacks(only: Optional[str]) -> List[Attack]:
    if not only:
        return sorted(ALL_ATTACKS, key=lambda a: a.priority)
    wanted = [x.strip().lower() for x in only.split(",")]
    table = {a.name.lower(): a for a in ALL_ATTACKS}
    chosen = [table[w] for w in wanted if w in table]
    return sorted(chosen, key=lambda a: a.priority)


# ---------- Progress / threading wrapper ----------
class _AttackRunnerThread(threading.Thread):
    def __init__(self, attack: Attack, key: PubKey, c: int, log):
        super().__init__(daemon=True)
        self.attack = attack
        self.key = key
        self.c = c
        self.log = log
        self.result: Optional[AttackResult] = None
        self.exc: Optional[Exception] = None

    def run(self):
        try:
            self.result = run_attack(self.attack, self.key, self.c, self.log)
        except Exception as ex:
            self.exc = ex
            self.result = AttackResult(self.attack.name, Outcome.ERROR, info=f"error:{type(ex).__name__}")

SPINNER = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"

def _progress_frame(atk_name: str, elapsed: float, est_seconds: float, tick: int, width: int = 28) -> str:
    """Bar while inside the time estimate, spinner with elapsed seconds after it."""
    if est_seconds > 0 and elapsed <= est_seconds:
        filled = int(min(1.0, elapsed / est_seconds) * width)
        eta = int(est_seconds - elapsed)
        return f"{atk_name:14} [{'#' * filled}{'-' * (width - filled)}] ETA:{eta:3d}s"
    return f"{atk_name:14} {SPINNER[tick % len(SPINNER)]} running... {int(elapsed):3d}s"

def _display_progress_loop(atk_name: str, est_seconds: float, thread: _AttackRunnerThread, stop_event: threading.Event):
    start = time.time()
    tick = 0
    while thread.is_alive() and not stop_event.is_set():
        frame = _progress_frame(atk_name, time.time() - start, est_seconds, tick)
        sys.stdout.write(f"\r{Colors.DIM}{frame}{Colors.RESET}")
        sys.stdout.flush()
        tick += 1
        time.sleep(0.18)
    sys.stdout.write("\r" + " " * 80 + "\r")
    sys.stdout.flush()

# ---------- End progress wrapper ----------


def run_with_progress(atk: Attack, key: PubKey, c: int, log) -> Optional[AttackResult]:
    """Run an attack on a worker thread. Returns None when the user skipped it with Ctrl+C."""
    est = ESTIMATED_SECONDS.get(atk.name, 5.0)
    t0 = time.time()
    runner = _AttackRunnerThread(atk, key, c, log)
    stop_event = threading.Event()
    runner.start()
    try:
        _display_progress_loop(atk.name, est, runner, stop_event)
        while runner.is_alive():
            runner.join(timeout=0.2)
    except KeyboardInterrupt:
        # skipped thread keeps running in the background; its result is dropped
        stop_event.set()
        print(one_line(None, atk.name, (time.time() - t0) * 1000.0))
        return None
    if runner.exc:
        log.debug(f"[{atk.name}] {type(runner.exc).__name__}: {runner.exc}")
    return runner.result

def print_result(res: AttackResult):
    print(f"\n{Colors.BOLD}--------------------Result-------------------------{Colors.RESET}")
    if not res.success:
        print(f"{Colors.RED}{Colors.BOLD}❌ {res.name}: {res.status.value}{Colors.RESET}")
        print(f"{Colors.DIM}{res.info}{Colors.RESET}")
        print(f"Time to run: {res.elapsed:.3f}ms\n")
        return
    print(f"{Colors.BOLD}{Colors.GREEN}Decrypted message (M): {res.plaintext}{Colors.RESET}")
    pt_bytes = long_to_bytes(res.plaintext)
    print(f"{Colors.BOLD}Hex:{Colors.RESET}   {pt_bytes.hex()}")
    if is_printable_bytes(pt_bytes):
        print(f"{Colors.BOLD}ASCII:{Colors.RESET} {pt_bytes.decode('ascii')}")
    if res.recovered_pq:
        p, q = res.recovered_pq
        print("Primes:")
        print(f"\tp: {p}")
        print(f"\tq: {q}")
    if res.recovered_d is not None:
        print(f"Decryption exponent (d): {res.recovered_d}")
    print(f"Time to run: {res.elapsed:.3f}ms\n")

def comparison_lines(results: List[AttackResult]) -> List[str]:
    lines = []
    header = f"{'Attack':<14} | {'Result':^17} | {'M':<20} | {'Time'}"
    lines.append(header)
    lines.append("-" * max(60, len(header)))
    for r in results:
        m = "-" if r.plaintext is None else str(r.plaintext)
        if len(m) > 20:
            m = m[:17] + "..."
        lines.append(f"{r.name:<14} | {r.status.value:^17} | {m:<20} | {r.elapsed:>9.3f}ms")
    by_name = {r.name: r for r in results}
    brute = by_name.get(BruteForceAttack.name)
    fact = by_name.get(FactoringAttack.name)
    if brute and fact and brute.success and fact.success:
        agree = "yes" if brute.plaintext == fact.plaintext else "NO"
        lines.append(f"Plaintexts agree: {agree}")
        if fact.elapsed > 0 and brute.elapsed > 0:
            fast, slow = (fact, brute) if fact.elapsed <= brute.elapsed else (brute, fact)
            lines.append(f"{fast.name} was {slow.elapsed / fast.elapsed:.1f}x faster than {slow.name}")
    return lines

def run_selected(attacks: List[Attack], key: PubKey, c: int, log) -> List[AttackResult]:
    results: List[AttackResult] = []
    for atk in attacks:
        if not atk.can_run(key, c):
            log.warning(f"[{atk.name}] cannot run on n={key.n}, e={key.e}")
            continue
        res = run_with_progress(atk, key, c, log)
        if res is None:
            continue
        print(one_line(res.status, atk.name, res.elapsed))
        print_result(res)
        results.append(res)
    if len(results) > 1:
        print(box("ATTACK COMPARISON", comparison_lines(results)))
        print()
    return results


# ========= Interactive menu =========
MENU = (
    "Choose an option below to continue:\n"
    "\t1) Attack 1: Brute Force M\n"
    "\t2) Attack 2: Factor N\n"
    "\t3) Compare both\n"
    "\t4) Quit\n"
)

def read_input() -> Tuple[PubKey, int]:
    print("--------------------Input--------------------------")
    e = parse_int_auto(input("Enter the encryption exponent (e): "))
    n = parse_int_auto(input("Enter the RSA modulus (N): "))
    c = parse_int_auto(input("Enter the ciphertext (C): "))
    return PubKey(n=n, e=e, label="input"), c

def interactive_menu(log):
    table = {a.name: a for a in ALL_ATTACKS}
    while True:
        print(MENU)
        try:
            sel = input("Select Option: ").strip()
        except EOFError:
            print()
            return
        if sel == "4":
            print("Goodbye")
            return
        if sel not in MENU_CHOICES:
            print(f"\n{Colors.RED}ERROR: Invalid option{Colors.RESET}\n")
            continue
        try:
            key, c = read_input()
        except ValueError as ex:
            log.error(f"{Colors.RED}Invalid number: {ex}{Colors.RESET}")
            continue
        except EOFError:
            print()
            return
        run_selected([table[name] for name in MENU_CHOICES[sel]], key, c, log)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.verbosity), format="%(message)s")
    log = logging.getLogger("rsacompare")

    print(banner())

    key: Optional[PubKey] = None
    c: Optional[int] = None
    try:
        e = parse_int_auto(args.e) if args.e else DEFAULT_E
        if args.publickey:
            key = load_key_from_pem(args.publickey, log)
            if key is None:
                return 1
        elif args.n:
            key = PubKey(n=parse_int_auto(args.n), e=e, label="N#0")
        if args.decrypt:
            c = parse_int_auto(args.decrypt)
    except ValueError as ex:
        log.error(f"{Colors.RED}Failed to parse arguments: {ex}{Colors.RESET}")
        return 1

    if args.demo is not None:
        try:
            key, d, p, q = generate_toy_key(args.demo, e)
        except ValueError as ex:
            log.error(f"{Colors.RED}{ex}{Colors.RESET}")
            return 1
        m = random.randrange(2, key.n)
        c = mod_pow(m, key.e, key.n)
        log.info(f"{Colors.CYAN}Demo key: p={p} q={q} d={d}, message m={m}{Colors.RESET}")

    if key is None:
        interactive_menu(log)
        return 0

    if c is None:
        log.error(Colors.RED + "No ciphertext provided. Use -c/--decrypt." + Colors.RESET)
        return 1

    attacks = pick_attacks(args.attack)
    if not attacks:
        log.error(f"{Colors.RED}No known attack in --attack {args.attack!r}{Colors.RESET}")
        return 1

    print(box("INPUT SUMMARY", [
        f"e: {key.e}",
        f"N: {key.n} ({key.label})",
        f"C: {c}",
        f"Attacks: {', '.join(a.name for a in attacks)}",
    ]))
    results = run_selected(attacks, key, c, log)
    log.info(Colors.CYAN + "All selected attacks finished." + Colors.RESET)
    return 0 if any(r.success for r in results) else 2


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n" + Colors.RED + "Interrupted by user." + Colors.RESET)
        sys.exit(130)


# ========= Entrypoint =========
if __name__ == "__main__":
    run()
