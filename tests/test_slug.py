from orderdesk.utils.slug import slugify


def test_strips_accents_and_punctuation():
    assert slugify("Hambúrguer Especial!") == "hamburguer-especial"
    assert slugify("Pão de Queijo") == "pao-de-queijo"


def test_collapses_separators():
    assert slugify("  X-Tudo   --  Duplo  ") == "x-tudo-duplo"


def test_empty_and_symbol_only_input():
    assert slugify("") == ""
    assert slugify("!!! ???") == ""


def test_idempotent():
    once = slugify("Açaí na Tigela 500ml")
    assert once == "acai-na-tigela-500ml"
    assert slugify(once) == once
