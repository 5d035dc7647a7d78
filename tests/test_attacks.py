"""
Tests for the brute-force and factoring attacks.
"""

import random

import pytest

from rsacompare import (
    NOT_FOUND,
    BruteForceAttack,
    FactoringAttack,
    FactoringResult,
    MalformedModulus,
    NoInverseExists,
    Outcome,
    PubKey,
    brute_force_decrypt,
    factor_and_decrypt,
    generate_toy_key,
    mod_pow,
    run_attack,
)


class TestBruteForce:
    """Tests for brute_force_decrypt."""

    def test_textbook_example(self):
        assert brute_force_decrypt(7, 187, 11) == 88

    def test_returns_first_match(self):
        # 0^e == 0 for every e > 0
        assert brute_force_decrypt(7, 187, 0) == 0

    def test_ciphertext_out_of_range(self):
        assert brute_force_decrypt(7, 187, 187) == NOT_FOUND

    def test_unreachable_ciphertext(self):
        # 2 is not a square mod 15
        assert brute_force_decrypt(2, 15, 2) == NOT_FOUND


class TestFactorAndDecrypt:
    """Tests for factor_and_decrypt."""

    def test_textbook_example(self):
        res = factor_and_decrypt(7, 187, 11)
        assert res == FactoringResult(m=88, p=11, q=17, d=23, phi=160)

    def test_second_textbook_example(self):
        res = factor_and_decrypt(17, 3233, 65)
        assert (res.p, res.q, res.d) == (53, 61, 2753)
        assert res.m == mod_pow(65, 2753, 3233)
        assert mod_pow(res.m, 17, 3233) == 65

    def test_prime_modulus(self):
        with pytest.raises(MalformedModulus):
            factor_and_decrypt(7, 13, 5)

    def test_square_modulus(self):
        # phi(p*p) is p*(p-1), not (p-1)^2
        with pytest.raises(MalformedModulus) as exc:
            factor_and_decrypt(5, 49, 3)
        assert exc.value.factors == [7, 7]

    def test_no_inverse(self):
        with pytest.raises(NoInverseExists):
            factor_and_decrypt(5, 187, 11)

    def test_result_is_immutable(self):
        res = factor_and_decrypt(7, 187, 11)
        with pytest.raises(AttributeError):
            res.m = 1


class TestAttacksAgree:
    """Both attacks recover the same plaintext for valid keys."""

    def test_textbook_key(self, textbook_key, log):
        brute = BruteForceAttack().run(textbook_key, 11, log)
        fact = FactoringAttack().run(textbook_key, 11, log)
        assert brute.success and fact.success
        assert brute.plaintext == fact.plaintext == 88

    def test_random_toy_keys(self, toy_keys, log):
        for key, d, p, q in toy_keys:
            m = random.randrange(0, key.n)
            c = mod_pow(m, key.e, key.n)
            assert brute_force_decrypt(key.e, key.n, c) == m
            res = factor_and_decrypt(key.e, key.n, c)
            assert res.m == m
            assert (res.p, res.q, res.d) == (p, q, d)


class TestAttackResults:
    """Failures come back as tagged outcomes, never as plaintexts."""

    def test_factoring_success_carries_diagnostics(self, textbook_key, log):
        res = FactoringAttack().run(textbook_key, 11, log)
        assert res.status is Outcome.SUCCESS
        assert res.recovered_pq == (11, 17)
        assert res.recovered_d == 23

    def test_factoring_malformed_modulus(self, log):
        res = FactoringAttack().run(PubKey(n=13, e=7), 5, log)
        assert res.status is Outcome.MALFORMED_MODULUS
        assert not res.success
        assert res.plaintext is None

    def test_factoring_square_modulus(self, log):
        res = FactoringAttack().run(PubKey(n=49, e=5), 3, log)
        assert res.status is Outcome.MALFORMED_MODULUS
        assert res.plaintext is None
        assert res.recovered_pq is None

    def test_factoring_no_inverse(self, log):
        res = FactoringAttack().run(PubKey(n=187, e=5), 11, log)
        assert res.status is Outcome.NO_INVERSE
        assert res.plaintext is None
        assert res.recovered_d is None

    def test_brute_force_not_found(self, log):
        res = BruteForceAttack().run(PubKey(n=15, e=2), 2, log)
        assert res.status is Outcome.NOT_FOUND
        assert res.plaintext is None

    def test_not_found_differs_from_no_inverse(self, log):
        brute = BruteForceAttack().run(PubKey(n=15, e=2), 2, log)
        fact = FactoringAttack().run(PubKey(n=187, e=5), 11, log)
        assert brute.status is not fact.status

    def test_can_run(self):
        assert FactoringAttack().can_run(PubKey(n=187, e=7), 11)
        assert not BruteForceAttack().can_run(PubKey(n=1, e=7), 0)
        assert not BruteForceAttack().can_run(PubKey(n=187, e=0), 0)

    def test_run_attack_records_elapsed(self, textbook_key, log):
        res = run_attack(FactoringAttack(), textbook_key, 11, log)
        assert res.success
        assert res.elapsed >= 0.0


class TestToyKeys:
    """Tests for generate_toy_key."""

    def test_key_is_consistent(self):
        key, d, p, q = generate_toy_key(10, e=65537)
        assert p < q
        assert key.n == p * q
        assert (key.e * d) % ((p - 1) * (q - 1)) == 1

    @pytest.mark.parametrize("bits,e", [(2, 65537), (8, 4), (8, 1)])
    def test_rejects_bad_parameters(self, bits, e):
        with pytest.raises(ValueError):
            generate_toy_key(bits, e=e)
