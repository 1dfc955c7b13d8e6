import pytest

SAINT_PAGE = """<!DOCTYPE html>
<html lang="pt-BR">
<head><meta charset="utf-8"><title>Santo do Dia</title></head>
<body>
<!-- <div class="entry-content"><p>Rascunho antigo</p></div> -->
<div id="date-post" class="data">
  <span class="dia">18</span>
  <span class="mes">Out</span>
  <span class="ano">2026</span>
</div>
<h1 class="entry-title">São Lucas, Evangelista</h1>
<div class="post entry-content clearfix">
  <div class="wp-block-image">
    <img src="https://santo.cancaonova.com/wp-content/themes/cn/icon-x-ext.png" alt="">
    <img src="https://img.cancaonova.com/cnimages/uploads/sao-lucas.jpg" alt="São Lucas">
  </div>
  <p><strong>Quem foi São Lucas</strong></p>
  <p>Lucas era médico em Antioquia.</p>
  <p>Escreveu o <b>Evangelho</b> e os Atos.</p>
  <h2>Sua missão</h2>
  <blockquote>Lucas, o médico amado, vos saúda.</blockquote>
  <ul>
    <li>Padroeiro dos médicos</li>
    <li> </li>
    <li>Compartilhe no Facebook</li>
  </ul>
  <strong>Oração</strong>
  <p>Compartilhe no WhatsApp</p>
  <p>.</p>
  <h3>Outros santos e beatos</h3>
  <ul>
    <li>Em Roma, santo Justo</li>
    <li>São Pedro de Alcântara</li>
  </ul>
</div>
<div class="footer"><p>Rodapé do site</p></div>
</body>
</html>
"""


@pytest.fixture
def saint_page() -> str:
    return SAINT_PAGE


@pytest.fixture
def liturgy_payload() -> dict:
    return {
        "data": "18/10/2026",
        "liturgia": "29º Domingo do Tempo Comum",
        "cor": "Verde",
        "leituras": {
            "primeiraLeitura": [
                {
                    "referencia": "Is 53, 10-11",
                    "titulo": "Leitura do Livro do Profeta Isaías",
                    "texto": "10Mas o Senhor quis 11Por esta vida",
                }
            ],
            "salmo": [
                {
                    "referencia": "Sl 32(33)",
                    "refrao": "Sobre nós venha, Senhor, a vossa graça.",
                    "texto": "— Reta é a palavra do Senhor,\n\n– Ele ama a justiça.",
                }
            ],
            "segundaLeitura": [],
            "evangelho": [
                {
                    "referencia": "Mc 10, 35-45",
                    "titulo": "Proclamação do Evangelho de Jesus Cristo segundo Marcos",
                    "texto": "35Tiago e João aproximaram-se 36Ele perguntou",
                }
            ],
        },
    }
