"""Static values for the configurator chat."""

WELCOME_MESSAGE_ID = "welcome"

_WELCOME_TEXT = """# 🌿 Bienvenido a MOOD

Soy tu asistente personal para que diseñemos juntos **la casa de tus sueños**.

### Sobre MOOD
En **MOOD** fabricamos viviendas sostenibles con tecnología **CLT (Madera Laminada Cruzada)** en nuestra fábrica *off-site*.
Nuestras casas son:
- 🧩 **Modulares**
- 🎨 **Personalizables**
- 🌱 **Respetuosas con el medio ambiente**

### ¿Cómo te puedo ayudar?
Estoy acá para guiarte a encontrar la configuración perfecta para vos.

Para empezar, contame:
- 👉 ¿Vas a vivir en la casa o es para turismo?
- 👉 ¿Qué capacidad necesitás?

Y si tenés dudas, preguntame lo que quieras — te voy a acompañar a armar tu casa ideal ✨
"""

# Two trailing spaces make each line a markdown hard break
WELCOME_MESSAGE = "\n".join(
    f"{line}  " if line else line for line in _WELCOME_TEXT.split("\n")
)

SELECT_HOUSES_DESCRIPTION = (
    "Selecciona las casas que cumplen con los requisitos del usuario "
    "dados los IDs de las casas seleccionadas"
)

CATALOG_SECTION_HEADER = "CATÁLOGO (JSON):"
