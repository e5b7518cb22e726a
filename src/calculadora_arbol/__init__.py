"""
Calculadora de teclado basada en un árbol de expresiones editable.

Paquetes:
    - core: operadores, árbol de expresiones y sesión de la calculadora
    - config: configuración (voz, display, memoria, teclado)
    - ui: renderizado del display con OpenCV
    - voice: feedback por voz con pyttsx3
    - app: coordinador y bucle principal
"""
